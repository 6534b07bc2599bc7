"""
Editor setup — Neovim, its plugin manager and configuration.

On Linux the release tarball is unpacked into ``/opt`` when running
as root and into ``~/.local`` otherwise, so no step here ever needs
sudo. On macOS Neovim comes from Homebrew.
"""

from __future__ import annotations

from pathlib import Path

from devstrap.core.context import RunContext
from devstrap.core.data import catalog
from devstrap.core.engine.executor import Phase
from devstrap.core.models.probe import Probe
from devstrap.core.models.resource import RemoteResource, RepoResource
from devstrap.core.phases._steps import fetch, fetch_repo, mkdir, rc_lines, shell

NAME = "editor"
TITLE = "Editor setup"


def neovim_dir(ctx: RunContext) -> Path:
    """Where the Linux release tarball is unpacked."""
    arch = catalog.NEOVIM_ARCH.get(ctx.machine, ctx.machine)
    base = Path("/opt") if ctx.is_root else ctx.home / ".local"
    return base / f"nvim-linux-{arch}"


def neovim_binary(ctx: RunContext) -> Path:
    if ctx.is_linux:
        return neovim_dir(ctx) / "bin" / "nvim"
    return Path(ctx.brew_prefix) / "bin" / "nvim"


def build(ctx: RunContext) -> Phase:
    config_dir = ctx.home / ".config" / "nvim"
    lazy_root = ctx.home / ".local" / "share" / "nvim" / "lazy"
    nvim = neovim_binary(ctx)

    if ctx.is_linux:
        arch = catalog.NEOVIM_ARCH.get(ctx.machine, ctx.machine)
        steps = [
            fetch(
                f"{NAME}.neovim",
                "Neovim release",
                RemoteResource(
                    url=catalog.NEOVIM_URL.format(arch=arch),
                    destination=str(neovim_dir(ctx)),
                    mode="archive",
                    strip_components=1,
                    replace=True,
                ),
            )
        ]
    else:
        steps = [
            shell(
                f"{NAME}.neovim",
                "brew install neovim",
                ["brew", "install", "neovim"],
                skip_if=Probe.file(str(nvim)),
            )
        ]

    steps += rc_lines(f"{NAME}.alias", ctx, f"alias nvim='{nvim}'")
    steps += [
        mkdir(f"{NAME}.config-dir", config_dir / "lua" / "plugins"),
        mkdir(f"{NAME}.lazy-dir", lazy_root),
        fetch_repo(
            f"{NAME}.lazy-nvim",
            "lazy.nvim",
            RepoResource(
                repo=catalog.LAZY_NVIM_REPO,
                ref=catalog.LAZY_NVIM_REF,
                destination=str(lazy_root / "lazy.nvim"),
            ),
            ctx,
        ),
        fetch_repo(
            f"{NAME}.config-files",
            "Neovim configuration",
            RepoResource(
                repo=catalog.NVIM_CONFIG_REPO,
                ref=catalog.NVIM_CONFIG_REF,
                files={
                    source: str(config_dir / dest)
                    for source, dest in catalog.NVIM_CONFIG_FILES.items()
                },
            ),
            ctx,
        ),
        fetch_repo(
            f"{NAME}.copilot",
            "copilot.vim",
            RepoResource(
                repo=catalog.COPILOT_REPO,
                ref=catalog.COPILOT_REF,
                destination=str(config_dir / "pack" / "github" / "start" / "copilot.vim"),
            ),
            ctx,
        ),
    ]
    return Phase(NAME, TITLE, steps)
