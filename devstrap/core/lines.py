"""
Line-presence enforcement for shell rc files.

Two primitives:

    ensure_line          — append an exact line once, never twice.
    replace_or_append    — drop every line matching a predicate, then
                           append the canonical line (pure text transform).

Lines are split on ``\\n`` only and compared byte-for-byte: no pattern
matching, no whitespace normalization, no substring hits. A file is
only rewritten when its content actually changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

# Undecodable bytes round-trip unchanged; "\r\n" is kept as-is.
_TEXT = {"encoding": "utf-8", "errors": "surrogateescape", "newline": ""}


def read_text(path: Path) -> str:
    """Read ``path`` without decoding errors or newline translation."""
    with path.open("r", **_TEXT) as f:
        return f.read()


def write_text(path: Path, content: str) -> None:
    with path.open("w", **_TEXT) as f:
        f.write(content)


def _lines(content: str) -> list[str]:
    """Split file content into lines, ignoring the final newline."""
    if not content:
        return []
    if content.endswith("\n"):
        content = content[:-1]
    return content.split("\n")


def has_line(content: str, line: str) -> bool:
    """Whether ``content`` holds ``line`` as a complete line."""
    return line in _lines(content)


def append_line(content: str, line: str) -> str:
    """Append ``line`` to ``content``, adding a separator if needed."""
    if content and not content.endswith("\n"):
        content += "\n"
    return f"{content}{line}\n"


def replace_or_append(
    content: str,
    predicate: Callable[[str], bool],
    line: str,
) -> str:
    """Remove all lines matching ``predicate``, then append ``line``.

    When the content already holds exactly one matching line and it
    equals ``line``, the content is returned untouched so reruns do
    not move the line to the end of the file.
    """
    lines = _lines(content)
    matches = [existing for existing in lines if predicate(existing)]
    if matches == [line]:
        return content

    kept = [existing for existing in lines if not predicate(existing)]
    body = "\n".join(kept)
    if kept:
        body += "\n"
    return append_line(body, line)


def ensure_line(path: Path, line: str) -> bool:
    """Make sure ``path`` contains ``line`` exactly once.

    Creates the file (and parent directory) when missing.

    Returns:
        True if the file was written, False if the line was present.

    Raises:
        OSError: If the file cannot be created or written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.touch()

    content = read_text(path)
    if has_line(content, line):
        logger.debug("Line already present in %s: %s", path, line)
        return False

    # Append-only: a plain "a" open never rewrites existing bytes.
    with path.open("a", **_TEXT) as f:
        if content and not content.endswith("\n"):
            f.write("\n")
        f.write(f"{line}\n")
    logger.info("Appended to %s: %s", path, line)
    return True


def ensure_replaced_line(
    path: Path,
    predicate: Callable[[str], bool],
    line: str,
) -> bool:
    """Apply :func:`replace_or_append` to a file, writing only on change.

    Returns:
        True if the file was written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = read_text(path) if path.exists() else ""
    updated = replace_or_append(content, predicate, line)
    if updated == content and path.exists():
        return False
    write_text(path, updated)
    logger.info("Replaced line in %s: %s", path, line)
    return True


def starts_with(prefix: str) -> Callable[[str], bool]:
    """Predicate matching lines that begin with ``prefix``."""
    return lambda candidate: candidate.startswith(prefix)
