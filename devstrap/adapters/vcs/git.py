"""
Git adapter — repositories by clone instead of archive download.

Takes the same ``{"repo": RepoResource}`` params as the fetch adapter,
so phases never care which strategy a run uses. Clones are shallow and
land in a scratch directory first; the destination is swapped only
after the clone succeeded.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path

from pydantic import ValidationError

from devstrap.adapters.base import Adapter, ExecutionContext
from devstrap.core.context import RunContext
from devstrap.core.models.action import Receipt
from devstrap.core.models.resource import RepoResource

logger = logging.getLogger(__name__)

CLONE_TIMEOUT = 300


class GitAdapter(Adapter):
    """Clone repositories with the git CLI.

    Action params:
        repo (dict): A serialized RepoResource.
    """

    @property
    def name(self) -> str:
        return "git"

    def is_available(self, run: RunContext) -> bool:
        return run.which("git") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not self.is_available(context.run):
            return False, "git is not installed"
        if "repo" not in context.params:
            return False, "Missing required param: 'repo'"
        try:
            repo = RepoResource.model_validate(context.params["repo"])
        except ValidationError as e:
            return False, f"Invalid resource: {e}"
        if repo.destination is None and not repo.files:
            return False, f"{repo.repo}: nothing to fetch"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        repo = RepoResource.model_validate(context.params["repo"])
        run = context.run
        written: list[str] = []

        try:
            if repo.destination is not None:
                self._refresh_tree(repo, Path(repo.destination), run)
                written.append(repo.destination)
            if repo.files:
                written.extend(self._export_files(repo, run))
        except (RuntimeError, OSError, subprocess.TimeoutExpired) as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Git error: {e}",
                metadata={"repo": repo.repo, "written": written},
            )

        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output=f"Cloned {repo.repo}@{repo.ref}",
            metadata={"repo": repo.repo, "written": written},
        )

    # ── Operations ──────────────────────────────────────────────

    def _refresh_tree(self, repo: RepoResource, destination: Path, run: RunContext) -> None:
        """Clone next to ``destination``, then swap it in."""
        destination.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(
            dir=destination.parent, prefix=f".{destination.name}.devstrap-"
        ) as scratch_name:
            scratch = Path(scratch_name)
            checkout = scratch / "checkout"
            self._clone(repo, checkout, run)
            if destination.exists() or destination.is_symlink():
                destination.rename(scratch / "previous")
            checkout.rename(destination)
        logger.info("Cloned %s → %s", repo.clone_url, destination)

    def _export_files(self, repo: RepoResource, run: RunContext) -> list[str]:
        """Clone into a temp dir and copy the mapped files out."""
        written = []
        with tempfile.TemporaryDirectory(prefix="devstrap-git-") as tmp:
            checkout = Path(tmp) / "checkout"
            self._clone(repo, checkout, run)
            for source, dest in repo.files.items():
                target = Path(dest)
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(checkout / source, target)
                written.append(dest)
        return written

    # ── Helpers ─────────────────────────────────────────────────

    def _clone(self, repo: RepoResource, target: Path, run: RunContext) -> None:
        self._git(
            ["clone", "--depth", "1", "--branch", repo.ref, repo.clone_url, str(target)],
            run,
        )

    def _git(self, args: list[str], run: RunContext) -> str:
        """Run a git command and return stdout."""
        env = dict(run.environ)
        env["PATH"] = run.search_path
        env["GIT_TERMINAL_PROMPT"] = "0"
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            timeout=CLONE_TIMEOUT,
            env=env,
        )
        if result.returncode != 0:
            raise RuntimeError(result.stderr.strip() or f"git {args[0]} failed")
        return result.stdout
