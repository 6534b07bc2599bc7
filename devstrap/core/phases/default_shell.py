"""
Shell default change — make zsh the login shell.
"""

from __future__ import annotations

from devstrap.core.context import RunContext
from devstrap.core.engine.executor import Phase
from devstrap.core.models.probe import Probe
from devstrap.core.phases._steps import shell

NAME = "default_shell"
TITLE = "Shell default change"


def build(ctx: RunContext) -> Phase:
    zsh = ctx.which("zsh")
    if zsh is None:
        return Phase(NAME, TITLE, skip_reason="zsh not installed")

    if ctx.is_linux:
        argv = ["chsh", "-s", zsh, ctx.user] if ctx.user else ["chsh", "-s", zsh]
    else:
        argv = ["chsh", "-s", zsh]

    step = shell(
        f"{NAME}.chsh",
        "chsh zsh",
        argv,
        sudo=ctx.is_linux,
        skip_if=Probe.login_shell("zsh"),
    )
    return Phase(NAME, TITLE, [step])
