"""
Remote resources — what to fetch, not how.

``RemoteResource`` is a plain URL with an extraction mode.
``RepoResource`` is a repository that can be materialized either from
release archives / raw file URLs or by a ``git clone``; the adapter
picked by the run's fetch strategy decides which.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

GITHUB = "https://github.com"
GITHUB_RAW = "https://raw.githubusercontent.com"


class RemoteResource(BaseModel):
    """A URL to materialize at ``destination``.

    mode ``raw`` writes the bytes to a file. mode ``archive`` extracts
    into a directory, dropping ``strip_components`` leading path parts
    (0 = flat extraction).
    """

    url: str
    destination: str
    mode: Literal["raw", "archive"] = "raw"
    strip_components: int = Field(default=0, ge=0)
    include: list[str] = Field(default_factory=list)   # basename globs
    replace: bool = False                              # swap dir vs merge


class RepoResource(BaseModel):
    """A GitHub repository, or a few files out of one.

    Either ``destination`` (the whole tree) or ``files`` (repo path →
    local path) must be set; both may be.
    """

    repo: str                 # "owner/name"
    ref: str = "master"       # branch or tag
    destination: str | None = None
    files: dict[str, str] = Field(default_factory=dict)

    @property
    def clone_url(self) -> str:
        return f"{GITHUB}/{self.repo}.git"

    @property
    def archive_url(self) -> str:
        return f"{GITHUB}/{self.repo}/archive/refs/heads/{self.ref}.tar.gz"

    def raw_url(self, path: str) -> str:
        return f"{GITHUB_RAW}/{self.repo}/{self.ref}/{path}"

    def tree_resource(self) -> RemoteResource:
        """The whole tree as a stripped archive, swapped in wholesale."""
        if self.destination is None:
            raise ValueError(f"{self.repo} has no destination directory")
        return RemoteResource(
            url=self.archive_url,
            destination=self.destination,
            mode="archive",
            strip_components=1,
            replace=True,
        )

    def file_resources(self) -> list[RemoteResource]:
        """One raw download per mapped file."""
        return [
            RemoteResource(url=self.raw_url(path), destination=dest)
            for path, dest in self.files.items()
        ]
