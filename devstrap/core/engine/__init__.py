"""Convergence engine — the existence gate and the phase loop."""

from devstrap.core.engine.executor import (  # noqa: F401
    ExecutionReport,
    Phase,
    PhaseResult,
    converge,
    execute_step,
)
from devstrap.core.engine.gate import ensure_installed  # noqa: F401
