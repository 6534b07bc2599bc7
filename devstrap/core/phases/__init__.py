"""
Phase planners, in execution order.

Each module exposes ``build(ctx) -> Phase``. The executor calls them
one at a time, right before the phase runs.
"""

from devstrap.core.phases import default_shell, editor, fonts, helpers, packages, shell

PHASES = (
    packages.build,
    editor.build,
    shell.build,
    fonts.build,
    helpers.build,
    default_shell.build,
)

__all__ = ["PHASES"]
