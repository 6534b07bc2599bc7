"""
Shared test fixtures and configuration.
"""

import logging
import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from devstrap.adapters.mock import MockAdapter
from devstrap.adapters.registry import AdapterRegistry
from devstrap.adapters.shell.filesystem import FilesystemAdapter
from devstrap.core.config.loader import Settings
from devstrap.core.context import RunContext, build_context

_OK_SCRIPT = "#!/bin/sh\nexit 0\n"


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """setup_logging replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A fresh, empty home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """Directory used as the whole PATH in tests."""
    path = tmp_path / "fakebin"
    path.mkdir()
    return path


@pytest.fixture
def make_bin(bin_dir: Path) -> Callable[..., Path]:
    """Create fake executables on the test PATH."""

    def _make(*names: str, script: str = _OK_SCRIPT) -> Path:
        for name in names:
            exe = bin_dir / name
            exe.write_text(script)
            exe.chmod(exe.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return bin_dir

    return _make


@pytest.fixture
def environ(home: Path, bin_dir: Path) -> dict[str, str]:
    """A minimal process environment pointing at the fake home and PATH."""
    return {
        "HOME": str(home),
        "PATH": str(bin_dir),
        "SHELL": "/bin/bash",
        "USER": "devstrap-tester",
    }


@pytest.fixture
def make_ctx(environ: dict[str, str]) -> Callable[..., RunContext]:
    """Build a run context for a given OS without touching the real machine."""

    def _make(system: str = "Linux", *, uid: int = 1000, machine: str = "x86_64", **settings) -> RunContext:
        return build_context(
            environ,
            system=system,
            machine=machine,
            uid=uid,
            settings=Settings(**settings),
        )

    return _make


@pytest.fixture
def mock_registry() -> AdapterRegistry:
    """Real filesystem adapter; shell, fetch and git are mocks."""
    return AdapterRegistry(
        [
            FilesystemAdapter(),
            MockAdapter("shell"),
            MockAdapter("fetch"),
            MockAdapter("git"),
        ]
    )
