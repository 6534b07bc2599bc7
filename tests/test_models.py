"""
Tests for domain models — actions, receipts and remote resources.
"""

import pytest
from pydantic import ValidationError

from devstrap.core.models import Action, Probe, Receipt, RemoteResource, RepoResource


class TestAction:
    def test_defaults(self):
        a = Action(id="editor.neovim", adapter="fetch")
        assert a.params == {}
        assert a.skip_if is None
        assert a.requires is None
        assert a.tolerant is False
        assert a.label == "editor.neovim"

    def test_label_prefers_name(self):
        assert Action(id="x", name="Neovim", adapter="fetch").label == "Neovim"

    def test_round_trips_probes(self):
        a = Action(id="x", adapter="shell", skip_if=Probe.command("brew"))
        assert Action.model_validate(a.model_dump()).skip_if == Probe.command("brew")


class TestReceipt:
    def test_success(self):
        r = Receipt.success(adapter="shell", action_id="a", output="done")
        assert r.ok and not r.failed and not r.skipped

    def test_failure(self):
        r = Receipt.failure(adapter="shell", action_id="a", error="nope")
        assert r.failed
        assert r.error == "nope"

    def test_skip(self):
        r = Receipt.skip(adapter="shell", action_id="a", reason="already present")
        assert r.skipped
        assert r.output == "already present"


class TestRemoteResource:
    def test_defaults(self):
        r = RemoteResource(url="https://x", destination="/tmp/x")
        assert r.mode == "raw"
        assert r.strip_components == 0
        assert r.replace is False

    def test_negative_strip_rejected(self):
        with pytest.raises(ValidationError):
            RemoteResource(url="u", destination="d", mode="archive", strip_components=-1)

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValidationError):
            RemoteResource(url="u", destination="d", mode="rsync")


class TestRepoResource:
    def test_urls(self):
        r = RepoResource(repo="folke/lazy.nvim", ref="stable")
        assert r.clone_url == "https://github.com/folke/lazy.nvim.git"
        assert r.archive_url == "https://github.com/folke/lazy.nvim/archive/refs/heads/stable.tar.gz"
        assert r.raw_url("lua/init.lua") == (
            "https://raw.githubusercontent.com/folke/lazy.nvim/stable/lua/init.lua"
        )

    def test_tree_resource(self):
        tree = RepoResource(repo="a/b", destination="/p/b").tree_resource()
        assert tree.mode == "archive"
        assert tree.strip_components == 1
        assert tree.replace is True
        assert tree.destination == "/p/b"

    def test_tree_resource_needs_destination(self):
        with pytest.raises(ValueError):
            RepoResource(repo="a/b").tree_resource()

    def test_file_resources(self):
        files = RepoResource(
            repo="kjtakke/neovim",
            files={"init.lua": "/h/init.lua", "search/nsearch.txt": "/h/nsearch.txt"},
        ).file_resources()
        assert [f.url for f in files] == [
            "https://raw.githubusercontent.com/kjtakke/neovim/master/init.lua",
            "https://raw.githubusercontent.com/kjtakke/neovim/master/search/nsearch.txt",
        ]
        assert all(f.mode == "raw" for f in files)
