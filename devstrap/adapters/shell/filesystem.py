"""
Filesystem adapter — rc-file lines, whole files, directories, modes.

Every operation here is idempotent by construction: a line is
appended only when absent, a file is rewritten only when its content
differs, a mode is set only when it is not already set.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from devstrap.adapters.base import Adapter, ExecutionContext
from devstrap.core.context import RunContext
from devstrap.core.lines import ensure_line, ensure_replaced_line, read_text, starts_with, write_text
from devstrap.core.models.action import Receipt

logger = logging.getLogger(__name__)

_REQUIRED: dict[str, tuple[str, ...]] = {
    "ensure_line": ("path", "line"),
    "replace_line": ("path", "prefix", "line"),
    "write": ("path", "content"),
    "mkdir": ("path",),
    "chmod": ("path", "mode"),
    "set_aside": ("path", "marker"),
}


class FilesystemAdapter(Adapter):
    """File and directory operations with receipts.

    Action params:
        operation (str): One of 'ensure_line', 'replace_line', 'write',
            'mkdir', 'chmod', 'set_aside'.
        path (str): Absolute target path.
        line (str): Exact line (ensure_line, replace_line).
        prefix (str): Lines starting with this are replaced (replace_line).
        content (str): Whole-file content (write).
        mode (int): Permission bits (chmod).
        marker (str): Entry whose absence marks the directory as
            incomplete (set_aside).
    """

    @property
    def name(self) -> str:
        return "filesystem"

    def is_available(self, run: RunContext) -> bool:
        return True

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.params.get("operation", "")
        if not operation:
            return False, "Missing required param: 'operation'"
        if operation not in _REQUIRED:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(sorted(_REQUIRED))}"

        for key in _REQUIRED[operation]:
            if key not in context.params:
                return False, f"Missing required param: '{key}' for {operation} operation"

        if not Path(context.params["path"]).is_absolute():
            return False, f"Path must be absolute: {context.params['path']}"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        operation = context.params["operation"]
        target = Path(context.params["path"])

        try:
            if operation == "ensure_line":
                changed = ensure_line(target, context.params["line"])
            elif operation == "replace_line":
                changed = ensure_replaced_line(
                    target,
                    starts_with(context.params["prefix"]),
                    context.params["line"],
                )
            elif operation == "write":
                changed = self._write(target, context.params["content"])
            elif operation == "mkdir":
                changed = self._mkdir(target)
            elif operation == "set_aside":
                changed = self._set_aside(target, context.params["marker"])
            else:
                changed = self._chmod(target, int(context.params["mode"]))
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Filesystem error: {e}",
                metadata={"operation": operation, "path": str(target)},
            )

        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output=f"{operation} {target}" + ("" if changed else " (unchanged)"),
            metadata={"operation": operation, "path": str(target), "changed": changed},
        )

    def _write(self, target: Path, content: str) -> bool:
        if target.is_file() and read_text(target) == content:
            return False
        target.parent.mkdir(parents=True, exist_ok=True)
        write_text(target, content)
        logger.info("Wrote %s (%d bytes)", target, len(content))
        return True

    def _mkdir(self, target: Path) -> bool:
        if target.is_dir():
            return False
        target.mkdir(parents=True, exist_ok=True)
        return True

    def _chmod(self, target: Path, mode: int) -> bool:
        current = target.stat().st_mode & 0o7777
        if current == mode:
            return False
        target.chmod(mode)
        return True

    def _set_aside(self, target: Path, marker: str) -> bool:
        if not target.is_dir() or (target / marker).exists():
            return False
        # One backup is kept; an older one is replaced.
        backup = target.with_name(f"{target.name}.incomplete")
        if backup.is_dir():
            shutil.rmtree(backup)
        elif backup.exists():
            backup.unlink()
        target.rename(backup)
        logger.warning("Moved incomplete %s to %s", target, backup)
        return True
