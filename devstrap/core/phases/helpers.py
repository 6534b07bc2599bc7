"""
Helper script installation — ~/bin, git and tmux helpers, tmux config.
"""

from __future__ import annotations

from devstrap.core.context import RunContext
from devstrap.core.data import catalog
from devstrap.core.data.bundled import TMUX_CONF, TMUX_HELPERS
from devstrap.core.engine.executor import Phase
from devstrap.core.models.resource import RemoteResource
from devstrap.core.phases._steps import chmod, fetch, mkdir, rc_lines, write_file

NAME = "helpers"
TITLE = "Helper script installation"

PATH_LINE = 'export PATH="$HOME/bin:$PATH"'
EXECUTABLE = 0o755


def source_line(script: str) -> str:
    return f'[ -f "$HOME/bin/{script}" ] && source "$HOME/bin/{script}"'


def build(ctx: RunContext) -> Phase:
    git_helper = ctx.bin_dir / "git-helper.sh"
    tmux_helper = ctx.bin_dir / "tmux.sh"

    steps = [mkdir(f"{NAME}.bin-dir", ctx.bin_dir)]
    steps += rc_lines(f"{NAME}.path", ctx, PATH_LINE)
    steps += [
        fetch(
            f"{NAME}.git-helper",
            "git-helper.sh",
            RemoteResource(url=catalog.GIT_HELPER_URL, destination=str(git_helper)),
        ),
        chmod(f"{NAME}.git-helper-mode", git_helper, EXECUTABLE),
        write_file(f"{NAME}.tmux-helper", tmux_helper, TMUX_HELPERS),
        chmod(f"{NAME}.tmux-helper-mode", tmux_helper, EXECUTABLE),
        write_file(f"{NAME}.tmux-conf", ctx.home / ".tmux.conf", TMUX_CONF),
    ]
    for script in catalog.HELPER_SCRIPTS:
        steps += rc_lines(f"{NAME}.source.{script}", ctx, source_line(script))
    return Phase(NAME, TITLE, steps)
