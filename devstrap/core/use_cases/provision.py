"""
Provision use case — converge this machine to the developer setup.

The full vertical slice: detect the platform, load settings, build the
run context, then plan and execute every phase through the adapter
registry. Errors that stop the run before or during convergence are
returned on the result, never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from devstrap.adapters.net.fetch import FetchAdapter
from devstrap.adapters.registry import AdapterRegistry
from devstrap.adapters.shell.command import ShellCommandAdapter
from devstrap.adapters.shell.filesystem import FilesystemAdapter
from devstrap.adapters.vcs.git import GitAdapter
from devstrap.core.context import RunContext, build_context
from devstrap.core.engine.executor import ExecutionReport, PhaseBuilder, PhaseResult, converge
from devstrap.core.errors import ConfigError, UnsupportedPlatformError
from devstrap.core.phases import PHASES

logger = logging.getLogger(__name__)


@dataclass
class ProvisionResult:
    """Result of a provisioning run."""

    report: ExecutionReport | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def build_registry() -> AdapterRegistry:
    """The production adapter set."""
    return AdapterRegistry(
        [ShellCommandAdapter(), FilesystemAdapter(), FetchAdapter(), GitAdapter()]
    )


def run_provision(
    environ: Mapping[str, str] | None = None,
    *,
    system: str | None = None,
    machine: str | None = None,
    uid: int | None = None,
    registry: AdapterRegistry | None = None,
    builders: Sequence[PhaseBuilder] = PHASES,
    on_context: Callable[[RunContext], None] | None = None,
    on_phase: Callable[[PhaseResult], None] | None = None,
) -> ProvisionResult:
    """Provision the machine.

    Args:
        environ: Environment mapping (default: the process environment).
        system: OS identifier override, for tests.
        machine: CPU architecture override, for tests.
        uid: Effective uid override, for tests.
        registry: Adapter registry (default: ``build_registry()``).
        builders: Phase planners in execution order.
        on_context: Called once with the run context, before any phase.
        on_phase: Called with each phase result as it completes.

    Returns:
        ProvisionResult; ``error`` is set on an unsupported platform, an
        invalid settings file or an aborted run.
    """
    try:
        ctx = build_context(environ, system=system, machine=machine, uid=uid)
    except (UnsupportedPlatformError, ConfigError) as e:
        logger.error("Cannot start: %s", e)
        return ProvisionResult(error=str(e))

    if on_context is not None:
        on_context(ctx)

    logger.info(
        "Provisioning %s (%s) for %s, fetch strategy %s",
        ctx.platform.value, ctx.machine, ctx.user or "<unknown user>", ctx.fetch_strategy,
    )

    if registry is None:
        registry = build_registry()

    report = converge(builders, registry, ctx, on_phase=on_phase)
    result = ProvisionResult(report=report)
    if report.aborted_phase is not None:
        result.error = f"{report.aborted_phase} phase failed: {report.error}"
    return result
