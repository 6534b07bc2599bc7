"""
Mock adapter — universal test double for all adapter operations.

Stands in for side-effecting adapters (package managers, network,
git) so a whole run can be exercised without touching the machine.
Configurable to return success, failure, or custom responses per step.
"""

from __future__ import annotations

from collections.abc import Callable

from devstrap.adapters.base import Adapter, ExecutionContext
from devstrap.core.context import RunContext
from devstrap.core.models.action import Receipt


class MockAdapter(Adapter):
    """Universal mock adapter for testing.

    By default, returns success for everything. Can be configured
    with custom responses or side effects per step ID.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        default_output: str = "[mock] executed",
    ):
        self._name = adapter_name
        self._available = available
        self._default_output = default_output
        self._responses: dict[str, Receipt] = {}
        self._effects: dict[str, Callable[[ExecutionContext], None]] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    @property
    def called_ids(self) -> list[str]:
        return [ctx.action.id for ctx in self._call_log]

    def is_available(self, run: RunContext) -> bool:
        return self._available

    def set_response(self, action_id: str, receipt: Receipt) -> None:
        """Set a custom response for a specific step ID."""
        self._responses[action_id] = receipt

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        """Configure a specific step to fail."""
        self._responses[action_id] = Receipt.failure(
            adapter=self._name,
            action_id=action_id,
            error=error,
        )

    def set_effect(self, action_id: str, effect: Callable[[ExecutionContext], None]) -> None:
        """Run ``effect`` when a specific step executes (e.g. create a dir)."""
        self._effects[action_id] = effect

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)

        effect = self._effects.get(context.action.id)
        if effect is not None:
            effect(context)

        if context.action.id in self._responses:
            return self._responses[context.action.id]

        return Receipt.success(
            adapter=self._name,
            action_id=context.action.id,
            output=self._default_output,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log, custom responses and effects."""
        self._call_log.clear()
        self._responses.clear()
        self._effects.clear()
