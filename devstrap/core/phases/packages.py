"""
Package baseline — system packages, Python and Node tooling.

Linux goes through apt and needs root or sudo; without either the
whole phase is skipped. macOS goes through Homebrew, installing it
first when it is missing.
"""

from __future__ import annotations

from devstrap.core.context import RunContext
from devstrap.core.data import catalog
from devstrap.core.engine.executor import Phase
from devstrap.core.models.action import Action
from devstrap.core.models.probe import Probe
from devstrap.core.phases._steps import shell

NAME = "packages"
TITLE = "Package baseline"

_APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def _tooling(*, sudo: bool) -> list[Action]:
    """pipx shims and utilities, then the npm language servers."""
    pipx = Probe.command("pipx")
    steps = [shell(f"{NAME}.pipx-ensurepath", "pipx ensurepath", ["pipx", "ensurepath"], requires=pipx)]
    steps += [
        shell(
            f"{NAME}.pipx-{pkg}",
            f"pipx install {pkg}",
            ["pipx", "install", pkg],
            requires=pipx,
            tolerant=True,
        )
        for pkg in catalog.PIPX_PACKAGES
    ]
    steps.append(
        shell(
            f"{NAME}.npm-globals",
            "npm language servers",
            ["npm", "install", "-g", *catalog.NPM_PACKAGES],
            sudo=sudo,
            requires=Probe.command("npm"),
        )
    )
    return steps


def _linux(ctx: RunContext) -> Phase:
    if ctx.which("apt") is None:
        return Phase(NAME, TITLE, skip_reason="apt not found")
    if not ctx.privileged:
        return Phase(NAME, TITLE, skip_reason="insufficient privileges to run apt (not root, no sudo)")

    node = Probe.command("node")
    steps = [
        shell(f"{NAME}.apt-update", "apt update", ["apt", "update"], sudo=True, preserve_env=True, env=_APT_ENV),
        shell(
            f"{NAME}.apt-install",
            "apt base packages",
            ["apt", "install", "-y", *catalog.APT_PACKAGES],
            sudo=True,
            preserve_env=True,
            env=_APT_ENV,
        ),
        shell(
            f"{NAME}.nodesource",
            "NodeSource repository",
            ["bash"],
            sudo=True,
            preserve_env=True,
            script_url=catalog.NODESOURCE_SETUP_URL,
            skip_if=node,
        ),
        shell(
            f"{NAME}.nodejs",
            "apt nodejs",
            ["apt", "install", "-y", "nodejs"],
            sudo=True,
            preserve_env=True,
            env=_APT_ENV,
            skip_if=node,
        ),
    ]
    steps += _tooling(sudo=True)
    return Phase(NAME, TITLE, steps)


def _darwin(ctx: RunContext) -> Phase:
    steps = [
        shell(
            f"{NAME}.homebrew",
            "Homebrew",
            ["/bin/bash"],
            env={"NONINTERACTIVE": "1"},
            script_url=catalog.HOMEBREW_INSTALL_URL,
            skip_if=Probe.command("brew"),
        ),
        shell(f"{NAME}.brew-update", "brew update", ["brew", "update"]),
        shell(
            f"{NAME}.brew-install",
            "brew base packages",
            ["brew", "install", *catalog.BREW_PACKAGES],
        ),
    ]
    steps += _tooling(sudo=False)
    return Phase(NAME, TITLE, steps)


def build(ctx: RunContext) -> Phase:
    return _linux(ctx) if ctx.is_linux else _darwin(ctx)
