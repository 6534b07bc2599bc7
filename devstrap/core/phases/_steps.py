"""
Step constructors shared by the phase planners.

Each helper returns an ``Action`` bound to one adapter, so planners
read as a list of desired states instead of adapter params.
"""

from __future__ import annotations

from pathlib import Path

from devstrap.core.context import RunContext
from devstrap.core.models.action import Action
from devstrap.core.models.probe import Probe
from devstrap.core.models.resource import RemoteResource, RepoResource


def shell(
    step_id: str,
    name: str,
    argv: list[str],
    *,
    sudo: bool = False,
    preserve_env: bool = False,
    env: dict[str, str] | None = None,
    script_url: str | None = None,
    script_args: list[str] | None = None,
    skip_if: Probe | None = None,
    requires: Probe | None = None,
    tolerant: bool = False,
) -> Action:
    params: dict = {"argv": argv}
    if sudo:
        params["sudo"] = True
        params["preserve_env"] = preserve_env
    if env:
        params["env"] = env
    if script_url:
        params["script_url"] = script_url
        params["script_args"] = script_args or []
    return Action(
        id=step_id,
        name=name,
        adapter="shell",
        params=params,
        skip_if=skip_if,
        requires=requires,
        tolerant=tolerant,
    )


def _fs(step_id: str, name: str, operation: str, path: Path, **params) -> Action:
    return Action(
        id=step_id,
        name=name,
        adapter="filesystem",
        params={"operation": operation, "path": str(path), **params},
    )


def ensure_line(step_id: str, path: Path, line: str) -> Action:
    return _fs(step_id, f"line in {path.name}", "ensure_line", path, line=line)


def replace_line(step_id: str, path: Path, prefix: str, line: str) -> Action:
    return _fs(step_id, f"{prefix} in {path.name}", "replace_line", path, prefix=prefix, line=line)


def rc_lines(step_id: str, ctx: RunContext, line: str) -> list[Action]:
    """The same line in both ~/.bashrc and ~/.zshrc."""
    return [
        ensure_line(f"{step_id}.{rc.name.lstrip('.')}", rc, line)
        for rc in ctx.rc_files()
    ]


def write_file(step_id: str, path: Path, content: str) -> Action:
    return _fs(step_id, f"write {path.name}", "write", path, content=content)


def mkdir(step_id: str, path: Path) -> Action:
    return _fs(step_id, f"mkdir {path.name}", "mkdir", path)


def chmod(step_id: str, path: Path, mode: int) -> Action:
    return _fs(step_id, f"chmod {path.name}", "chmod", path, mode=mode)


def fetch(
    step_id: str,
    name: str,
    resource: RemoteResource,
    *,
    skip_if: Probe | None = None,
    tolerant: bool = False,
) -> Action:
    return Action(
        id=step_id,
        name=name,
        adapter="fetch",
        params={"remote": resource.model_dump()},
        skip_if=skip_if,
        tolerant=tolerant,
    )


def fetch_repo(
    step_id: str,
    name: str,
    repo: RepoResource,
    ctx: RunContext,
    *,
    tolerant: bool = False,
) -> Action:
    """A repository step; the run's fetch strategy picks the adapter."""
    return Action(
        id=step_id,
        name=name,
        adapter="git" if ctx.fetch_strategy == "git" else "fetch",
        params={"repo": repo.model_dump()},
        tolerant=tolerant,
    )


def set_aside(step_id: str, path: Path, marker: str, *, requires: Probe | None = None) -> Action:
    """Move ``path`` out of the way when it exists without ``marker``."""
    return Action(
        id=step_id,
        name=f"set aside incomplete {path.name}",
        adapter="filesystem",
        params={"operation": "set_aside", "path": str(path), "marker": marker},
        requires=requires,
    )
