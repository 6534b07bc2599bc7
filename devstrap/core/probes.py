"""
Probe evaluation — answers "is this already there?" for a context.

Read-only. Commands are resolved on ``ctx.search_path`` so results do
not depend on the live process environment.
"""

from __future__ import annotations

import logging
from pathlib import Path

from devstrap.core.context import RunContext
from devstrap.core.models.probe import Probe

logger = logging.getLogger(__name__)


def _holds(probe: Probe, ctx: RunContext) -> bool:
    if probe.kind == "command":
        return ctx.which(probe.target) is not None
    if probe.kind == "file":
        return Path(probe.target).is_file()
    if probe.kind == "login_shell":
        return Path(ctx.shell).name == probe.target
    raise ValueError(f"Unknown probe kind: {probe.kind}")


def evaluate(probe: Probe, ctx: RunContext) -> bool:
    """Evaluate ``probe`` against ``ctx``."""
    result = _holds(probe, ctx)
    if probe.negate:
        result = not result
    logger.debug("Probe %s → %s", probe, result)
    return result
