"""
Engine executor — the convergence loop.

Runs the phases in their fixed order. Each phase is planned right
before it executes, so its probes see what earlier phases installed.
Every step goes through the existence gate and then the adapter
registry; a non-tolerant failure stops the whole run.

Flow:
    plan phase → for each step: requires? → skip_if? → adapter → receipt
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from devstrap.adapters.registry import AdapterRegistry
from devstrap.core.context import RunContext
from devstrap.core.engine.gate import ensure_installed
from devstrap.core.errors import StepFailedError
from devstrap.core.models.action import Action, Receipt
from devstrap.core.probes import evaluate

logger = logging.getLogger(__name__)


@dataclass
class Phase:
    """The planned steps of one phase.

    A phase with a ``skip_reason`` runs no steps at all.
    """

    name: str
    title: str = ""
    steps: list[Action] = field(default_factory=list)
    skip_reason: str = ""


PhaseBuilder = Callable[[RunContext], Phase]


@dataclass
class PhaseResult:
    """Outcome of one phase."""

    name: str
    title: str = ""
    receipts: list[Receipt] = field(default_factory=list)
    skip_reason: str = ""
    error: str = ""

    @property
    def status(self) -> str:
        if self.error:
            return "failed"
        if self.skip_reason:
            return "skipped"
        if any(r.failed for r in self.receipts):
            return "partial"
        return "ok"

    @property
    def changed(self) -> int:
        return sum(1 for r in self.receipts if r.ok)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.receipts if r.skipped)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.receipts if r.failed)


@dataclass
class ExecutionReport:
    """Result of a whole run."""

    operation_id: str = ""
    phases: list[PhaseResult] = field(default_factory=list)
    aborted_phase: str | None = None
    error: str | None = None

    @property
    def status(self) -> str:
        if self.aborted_phase is not None:
            return "aborted"
        if any(p.status == "partial" for p in self.phases):
            return "partial"
        return "ok"


def execute_step(action: Action, registry: AdapterRegistry, ctx: RunContext) -> Receipt:
    """Run one step behind its prerequisite and existence gate.

    Raises:
        StepFailedError: The step failed and is not tolerant.
    """
    if action.requires is not None and not evaluate(action.requires, ctx):
        logger.warning("Skipping %s: %s does not hold", action.label, action.requires)
        return Receipt.skip(
            adapter=action.adapter,
            action_id=action.id,
            reason=f"requires {action.requires}",
        )

    skip_if = action.skip_if
    return ensure_installed(
        (lambda: evaluate(skip_if, ctx)) if skip_if is not None else (lambda: False),
        lambda: registry.execute_action(action, ctx),
        tolerant=action.tolerant,
        label=action.label,
        adapter=action.adapter,
        action_id=action.id,
    )


def converge(
    builders: Sequence[PhaseBuilder],
    registry: AdapterRegistry,
    ctx: RunContext,
    on_phase: Callable[[PhaseResult], None] | None = None,
) -> ExecutionReport:
    """Plan and run every phase in order, stopping at the first fatal step.

    Args:
        builders: Phase planners, in execution order.
        registry: Adapter registry for dispatch.
        ctx: The run context.
        on_phase: Called with each phase result as soon as it is known.

    Returns:
        ExecutionReport; ``aborted_phase`` is set when the run stopped early.
    """
    report = ExecutionReport(operation_id=uuid.uuid4().hex[:12])

    for build in builders:
        phase = build(ctx)
        result = PhaseResult(name=phase.name, title=phase.title or phase.name)
        report.phases.append(result)

        if phase.skip_reason:
            logger.warning("Skipping phase %s: %s", phase.name, phase.skip_reason)
            result.skip_reason = phase.skip_reason
            if on_phase is not None:
                on_phase(result)
            continue

        logger.info("Phase %s: %d step(s)", phase.name, len(phase.steps))
        try:
            for action in phase.steps:
                result.receipts.append(execute_step(action, registry, ctx))
        except StepFailedError as e:
            logger.error("Phase %s aborted: %s", phase.name, e)
            result.error = str(e)
            report.aborted_phase = phase.name
            report.error = str(e)
            if on_phase is not None:
                on_phase(result)
            break

        if on_phase is not None:
            on_phase(result)

    logger.info("Run %s finished: %s", report.operation_id, report.status)
    return report
