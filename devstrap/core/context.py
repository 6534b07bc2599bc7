"""
Run context — everything a run knows about the machine, read once.

The context is built ONCE at startup from the process environment and
then passed explicitly to every phase, probe and adapter. Nothing
below this module reads ``os.environ``, ``Path.home()`` or the live
``PATH``: resolving commands goes through ``search_path`` here.
"""

from __future__ import annotations

import os
import platform as _platform
import pwd
import shutil
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from devstrap.core.config.loader import Settings, find_settings_file, load_settings
from devstrap.core.platform import Platform, detect_platform

# Homebrew is not on PATH right after a fresh install.
_BREW_PREFIXES = {"arm64": "/opt/homebrew", "x86_64": "/usr/local"}

_ARCH_ALIASES = {"amd64": "x86_64", "aarch64": "arm64"}


class RunContext(BaseModel):
    """Immutable per-run configuration."""

    model_config = ConfigDict(frozen=True)

    platform: Platform
    home: Path
    plugin_root: Path          # $ZSH_CUSTOM
    shell: str = ""            # login shell path, from the passwd entry
    user: str = ""
    uid: int = 1000
    machine: str = "x86_64"
    search_path: str = ""
    sudo_available: bool = False
    environ: dict[str, str] = Field(default_factory=dict)   # snapshot at startup
    settings: Settings = Field(default_factory=Settings)

    # ── Derived locations ───────────────────────────────────────

    @property
    def is_linux(self) -> bool:
        return self.platform is Platform.LINUX

    @property
    def is_root(self) -> bool:
        return self.uid == 0

    @property
    def privileged(self) -> bool:
        """Can run package managers that need root."""
        return self.is_root or self.sudo_available

    @property
    def bashrc(self) -> Path:
        return self.home / ".bashrc"

    @property
    def zshrc(self) -> Path:
        return self.home / ".zshrc"

    @property
    def font_dir(self) -> Path:
        if self.is_linux:
            return self.home / ".fonts"
        return self.home / "Library" / "Fonts"

    @property
    def bin_dir(self) -> Path:
        return self.home / "bin"

    @property
    def brew_prefix(self) -> str:
        return _BREW_PREFIXES.get(self.machine, "/usr/local")

    @property
    def fetch_strategy(self) -> str:
        return self.settings.fetch_strategy

    def sudo(self, argv: list[str], *, preserve_env: bool = False) -> list[str]:
        """Prefix ``argv`` with sudo when it is needed and available."""
        if self.is_root or not self.sudo_available:
            return list(argv)
        prefix = ["sudo", "-E"] if preserve_env else ["sudo"]
        return [*prefix, *argv]

    def which(self, command: str) -> str | None:
        """Resolve ``command`` on the run's search path."""
        return shutil.which(command, path=self.search_path)

    def rc_files(self) -> tuple[Path, Path]:
        return self.bashrc, self.zshrc


def _search_path(environ: Mapping[str, str], platform: Platform, home: Path, machine: str) -> str:
    entries = [p for p in environ.get("PATH", "").split(os.pathsep) if p]
    extra = [str(home / ".local" / "bin")]
    if platform is Platform.DARWIN:
        extra.append(f"{_BREW_PREFIXES.get(machine, '/usr/local')}/bin")
    for entry in extra:
        if entry not in entries:
            entries.append(entry)
    return os.pathsep.join(entries)


def _login_shell(user: str, environ: Mapping[str, str]) -> str:
    """The user's login shell as recorded in passwd.

    Read fresh on every run so a previous ``chsh`` is seen. Falls back to
    ``$SHELL`` when the user has no passwd entry.
    """
    fallback = environ.get("SHELL", "")
    if not user:
        return fallback
    try:
        return pwd.getpwnam(user).pw_shell
    except KeyError:
        return fallback


def build_context(
    environ: Mapping[str, str] | None = None,
    *,
    system: str | None = None,
    machine: str | None = None,
    uid: int | None = None,
    settings: Settings | None = None,
) -> RunContext:
    """Build the run context. The platform check comes first.

    Args:
        environ: Environment mapping (default: ``os.environ``).
        system: OS identifier override (default: ``platform.system()``).
        machine: CPU architecture override (default: ``platform.machine()``).
        uid: Effective uid override (default: ``os.geteuid()``).
        settings: Loaded settings (default: read from the settings file).

    Raises:
        UnsupportedPlatformError: Before anything else is looked at.
        ConfigError: The settings file is unreadable or invalid.
    """
    detected = detect_platform(system)

    if environ is None:
        environ = os.environ
    home = Path(environ.get("HOME") or os.path.expanduser("~"))
    arch = (machine or _platform.machine()).lower()
    arch = _ARCH_ALIASES.get(arch, arch)
    path = _search_path(environ, detected, home, arch)

    plugin_root = environ.get("ZSH_CUSTOM") or str(home / ".oh-my-zsh" / "custom")
    if settings is None:
        settings = load_settings(find_settings_file(environ, home))

    user = environ.get("USER") or environ.get("LOGNAME", "")
    return RunContext(
        platform=detected,
        home=home,
        plugin_root=Path(plugin_root).expanduser(),
        shell=_login_shell(user, environ),
        user=user,
        uid=os.geteuid() if uid is None else uid,
        machine=arch,
        search_path=path,
        sudo_available=shutil.which("sudo", path=path) is not None,
        environ=dict(environ),
        settings=settings,
    )
