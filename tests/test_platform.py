"""
Tests for platform selection and the run context built on it.
"""

from pathlib import Path
from types import SimpleNamespace

import pytest

from devstrap.core.config.loader import Settings
from devstrap.core.context import build_context
from devstrap.core.errors import ConfigError, UnsupportedPlatformError
from devstrap.core.platform import Platform, detect_platform


class TestDetectPlatform:
    def test_linux(self):
        assert detect_platform("Linux") is Platform.LINUX

    def test_darwin(self):
        assert detect_platform("Darwin") is Platform.DARWIN

    @pytest.mark.parametrize("system", ["Windows", "FreeBSD", "linux", "darwin", ""])
    def test_everything_else_is_unsupported(self, system):
        with pytest.raises(UnsupportedPlatformError) as exc:
            detect_platform(system)
        assert "Unsupported OS" in str(exc.value)

    def test_platform_values(self):
        assert Platform.LINUX.value == "linux"
        assert Platform.DARWIN.value == "darwin"


class TestBuildContext:
    def test_unsupported_platform_raises_first(self, environ):
        # An invalid settings file would raise ConfigError; the OS check wins.
        environ["DEVSTRAP_CONFIG"] = "/nonexistent/config.yml"
        with pytest.raises(UnsupportedPlatformError):
            build_context(environ, system="SunOS")

    def test_reads_environment(self, environ, home: Path):
        ctx = build_context(environ, system="Linux", machine="x86_64", uid=1000)
        assert ctx.platform is Platform.LINUX
        assert ctx.home == home
        assert ctx.user == "devstrap-tester"
        assert ctx.shell == "/bin/bash"
        assert ctx.plugin_root == home / ".oh-my-zsh" / "custom"
        assert ctx.environ["HOME"] == str(home)

    def test_zsh_custom_override(self, environ, tmp_path: Path):
        environ["ZSH_CUSTOM"] = str(tmp_path / "custom")
        ctx = build_context(environ, system="Linux", uid=1000)
        assert ctx.plugin_root == tmp_path / "custom"

    def test_login_shell_from_passwd(self, environ, monkeypatch):
        entry = SimpleNamespace(pw_shell="/usr/bin/zsh")
        monkeypatch.setattr("devstrap.core.context.pwd.getpwnam", lambda user: entry)
        ctx = build_context(environ, system="Linux", uid=1000)
        assert ctx.shell == "/usr/bin/zsh"

    def test_logname_fallback(self, environ):
        del environ["USER"]
        environ["LOGNAME"] = "other"
        ctx = build_context(environ, system="Linux", uid=1000)
        assert ctx.user == "other"

    @pytest.mark.parametrize("raw,normalized", [("amd64", "x86_64"), ("aarch64", "arm64"), ("arm64", "arm64")])
    def test_machine_normalized(self, environ, raw, normalized):
        ctx = build_context(environ, system="Linux", machine=raw, uid=1000)
        assert ctx.machine == normalized

    def test_search_path_adds_local_bin(self, environ, home: Path, bin_dir: Path):
        ctx = build_context(environ, system="Linux", uid=1000)
        entries = ctx.search_path.split(":")
        assert entries[0] == str(bin_dir)
        assert str(home / ".local" / "bin") in entries

    def test_darwin_search_path_has_brew(self, environ):
        ctx = build_context(environ, system="Darwin", machine="arm64", uid=501)
        assert "/opt/homebrew/bin" in ctx.search_path.split(":")
        assert ctx.brew_prefix == "/opt/homebrew"

    def test_sudo_detected_on_path(self, environ, make_bin):
        assert not build_context(environ, system="Linux", uid=1000).sudo_available
        make_bin("sudo")
        ctx = build_context(environ, system="Linux", uid=1000)
        assert ctx.sudo_available
        assert ctx.privileged

    def test_settings_loaded_from_home(self, environ, home: Path):
        config = home / ".config" / "devstrap" / "config.yml"
        config.parent.mkdir(parents=True)
        config.write_text("fetch_strategy: git\n")
        ctx = build_context(environ, system="Linux", uid=1000)
        assert ctx.fetch_strategy == "git"

    def test_invalid_settings_raise(self, environ, home: Path):
        config = home / "bad.yml"
        config.write_text("fetch_strategy: ftp\n")
        environ["DEVSTRAP_CONFIG"] = str(config)
        with pytest.raises(ConfigError):
            build_context(environ, system="Linux", uid=1000)

    def test_context_is_frozen(self, environ):
        ctx = build_context(environ, system="Linux", uid=1000, settings=Settings())
        with pytest.raises(Exception):
            ctx.uid = 0


class TestRunContext:
    def test_linux_locations(self, make_ctx, home: Path):
        ctx = make_ctx("Linux")
        assert ctx.is_linux
        assert ctx.font_dir == home / ".fonts"
        assert ctx.bin_dir == home / "bin"
        assert ctx.rc_files() == (home / ".bashrc", home / ".zshrc")

    def test_darwin_font_dir(self, make_ctx, home: Path):
        ctx = make_ctx("Darwin")
        assert not ctx.is_linux
        assert ctx.font_dir == home / "Library" / "Fonts"

    def test_sudo_prefix(self, make_ctx, make_bin):
        make_bin("sudo")
        ctx = make_ctx("Linux")
        assert ctx.sudo(["apt", "update"]) == ["sudo", "apt", "update"]
        assert ctx.sudo(["bash"], preserve_env=True) == ["sudo", "-E", "bash"]

    def test_root_needs_no_sudo(self, make_ctx, make_bin):
        make_bin("sudo")
        ctx = make_ctx("Linux", uid=0)
        assert ctx.is_root
        assert ctx.sudo(["apt", "update"]) == ["apt", "update"]

    def test_which_uses_search_path_only(self, make_ctx, make_bin):
        ctx = make_ctx("Linux")
        assert ctx.which("zsh") is None
        make_bin("zsh")
        assert ctx.which("zsh") is not None
