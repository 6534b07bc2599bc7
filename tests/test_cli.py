"""
Tests for the CLI — status lines, banner and exit codes.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from devstrap.adapters.mock import MockAdapter
from devstrap.adapters.registry import AdapterRegistry
from devstrap.adapters.shell.filesystem import FilesystemAdapter
from devstrap.core.use_cases import provision
from devstrap.main import cli

_HOST_VARS = (
    "ZSH_CUSTOM",
    "LOGNAME",
    "DEVSTRAP_CONFIG",
    "DEVSTRAP_LOG_LEVEL",
    "DEVSTRAP_LOG_FILE",
    "DEVSTRAP_LOG_FILE_LEVEL",
)


@pytest.fixture
def cli_env(environ, make_bin, monkeypatch, home: Path):
    """Run the CLI against the fake home with mocked side effects."""
    make_bin("zsh")
    shell, fetch = MockAdapter("shell"), MockAdapter("fetch")

    def write_helper(ctx):
        target = Path(ctx.params["remote"]["destination"])
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("# git helpers\n")

    fetch.set_effect("helpers.git-helper", write_helper)
    registry = AdapterRegistry([FilesystemAdapter(), shell, fetch, MockAdapter("git")])
    monkeypatch.setattr(provision, "build_registry", lambda: registry)
    return environ


def _invoke(env: dict[str, str]):
    # CliRunner merges env into os.environ; None unsets host values.
    isolated = {key: None for key in _HOST_VARS}
    isolated.update(env)
    return CliRunner().invoke(cli, [], env=isolated)


class TestCLI:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Provision this machine" in result.output

    def test_rejects_arguments(self):
        result = CliRunner().invoke(cli, ["install"])
        assert result.exit_code != 0

    def test_success_banner(self, cli_env, monkeypatch):
        monkeypatch.setattr("devstrap.core.platform._platform.system", lambda: "Linux")
        result = _invoke(cli_env)
        assert result.exit_code == 0, result.output
        assert "Package baseline" in result.output
        assert "skipped: apt not found" in result.output
        assert "Helper script installation" in result.output
        assert "Installation complete" in result.output

    def test_unsupported_platform_exits_1(self, cli_env, monkeypatch, home: Path):
        monkeypatch.setattr("devstrap.core.platform._platform.system", lambda: "Windows")
        result = _invoke(cli_env)
        assert result.exit_code == 1
        assert "Unsupported OS: Windows" in result.output
        assert "Installation complete" not in result.output
        assert list(home.iterdir()) == []

    def test_abort_exits_1(self, cli_env, monkeypatch):
        monkeypatch.setattr("devstrap.core.platform._platform.system", lambda: "Linux")
        registry = provision.build_registry()
        registry.get("fetch").set_failure("fonts.nerd-font", "HTTP Error 503")
        result = _invoke(cli_env)
        assert result.exit_code == 1
        assert "fonts phase failed" in result.output
        assert "Installation complete" not in result.output
