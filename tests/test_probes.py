"""
Tests for probes — declarative presence checks against a run context.
"""

from pathlib import Path
from types import SimpleNamespace

import pytest

from devstrap.core.models.probe import Probe
from devstrap.core.probes import evaluate


class TestProbeModel:
    def test_str(self):
        assert str(Probe.command("brew")) == "command:brew"
        assert str(Probe.login_shell("zsh")) == "login_shell:zsh"
        assert str(Probe(kind="file", target="/x", negate=True)) == "not file:/x"

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            Probe(kind="socket", target="/tmp/x")


class TestEvaluate:
    def test_command_on_fake_path(self, make_ctx, make_bin):
        ctx = make_ctx()
        assert not evaluate(Probe.command("starship"), ctx)
        make_bin("starship")
        assert evaluate(Probe.command("starship"), ctx)

    def test_file(self, make_ctx, home: Path):
        ctx = make_ctx()
        omz = home / ".oh-my-zsh"
        marker = omz / "oh-my-zsh.sh"
        omz.mkdir()
        assert not evaluate(Probe.file(str(omz)), ctx)
        assert not evaluate(Probe.file(str(marker)), ctx)
        marker.write_text("# framework\n")
        assert evaluate(Probe.file(str(marker)), ctx)

    def test_negate(self, make_ctx, home: Path):
        ctx = make_ctx()
        assert evaluate(Probe(kind="file", target=str(home / "nope"), negate=True), ctx)

    def test_login_shell(self, make_ctx, environ):
        assert not evaluate(Probe.login_shell("zsh"), make_ctx())
        environ["SHELL"] = "/usr/bin/zsh"
        assert evaluate(Probe.login_shell("zsh"), make_ctx())

    def test_login_shell_matches_basename_exactly(self, make_ctx, environ):
        environ["SHELL"] = "/opt/zsh-tools/bin/zsh5"
        assert not evaluate(Probe.login_shell("zsh"), make_ctx())

    def test_login_shell_follows_passwd(self, make_ctx, monkeypatch):
        entry = SimpleNamespace(pw_shell="/usr/bin/zsh")
        monkeypatch.setattr("devstrap.core.context.pwd.getpwnam", lambda user: entry)
        assert evaluate(Probe.login_shell("zsh"), make_ctx())
