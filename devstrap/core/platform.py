"""
Platform selector — the one OS decision of a run.

Exact-match only: ``uname`` reports ``Linux`` or ``Darwin`` for the two
supported systems. Anything else (including WSL-less Windows, BSDs,
or an empty string) stops the run before a single file is touched.
"""

from __future__ import annotations

import platform as _platform
from enum import StrEnum

from devstrap.core.errors import UnsupportedPlatformError

_SYSTEMS = {
    "Linux": "linux",
    "Darwin": "darwin",
}


class Platform(StrEnum):
    LINUX = "linux"
    DARWIN = "darwin"


def detect_platform(system: str | None = None) -> Platform:
    """Map an OS identifier to a Platform.

    Args:
        system: The identifier to map. Defaults to ``platform.system()``.

    Raises:
        UnsupportedPlatformError: For anything but ``Linux``/``Darwin``.
    """
    if system is None:
        system = _platform.system()
    value = _SYSTEMS.get(system)
    if value is None:
        raise UnsupportedPlatformError(system)
    return Platform(value)
