"""
Font installation — the DroidSansMono Nerd Font.

The font directory is shared with whatever else the user installed,
so fetched ``*.ttf`` files are merged in, never swapped.
"""

from __future__ import annotations

from devstrap.core.context import RunContext
from devstrap.core.data import catalog
from devstrap.core.engine.executor import Phase
from devstrap.core.models.probe import Probe
from devstrap.core.models.resource import RemoteResource
from devstrap.core.phases._steps import fetch, mkdir, shell

NAME = "fonts"
TITLE = "Font installation"


def build(ctx: RunContext) -> Phase:
    steps = [
        mkdir(f"{NAME}.font-dir", ctx.font_dir),
        fetch(
            f"{NAME}.nerd-font",
            "DroidSansMono Nerd Font",
            RemoteResource(
                url=catalog.NERD_FONT_URL,
                destination=str(ctx.font_dir),
                mode="archive",
                include=list(catalog.FONT_PATTERNS),
            ),
        ),
    ]
    if ctx.is_linux:
        steps.append(
            shell(
                f"{NAME}.fc-cache",
                "fc-cache",
                ["fc-cache", "-f"],
                requires=Probe.command("fc-cache"),
                tolerant=True,
            )
        )
    return Phase(NAME, TITLE, steps)
