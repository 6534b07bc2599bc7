"""
Existence-gated installer.

``ensure_installed`` is the backbone of every "only do this if it is
not already there" decision. The probe runs first; the install action
runs at most once, and only when the probe says the effect is absent.

Failure policy is chosen per call site: a failing action raises
``StepFailedError`` unless the caller passed ``tolerant=True``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from devstrap.core.errors import DevstrapError, StepFailedError
from devstrap.core.models.action import Receipt

logger = logging.getLogger(__name__)


def ensure_installed(
    probe: Callable[[], bool],
    install_fn: Callable[[], Receipt],
    *,
    tolerant: bool = False,
    label: str = "step",
    adapter: str = "gate",
    action_id: str | None = None,
) -> Receipt:
    """Run ``install_fn`` unless ``probe`` reports the effect present.

    Args:
        probe: Zero-argument predicate; True means "already done".
        install_fn: The action. Returns a Receipt; may also raise
            ``DevstrapError`` or ``OSError``.
        tolerant: Log failures and continue instead of raising.
        label: Name used in log lines and errors.
        adapter: Adapter name recorded on receipts built here.
        action_id: Step id recorded on receipts built here (default: label).

    Returns:
        The action's receipt, or a skip receipt when gated out.

    Raises:
        StepFailedError: The action failed and ``tolerant`` is False.
    """
    action_id = action_id or label
    if probe():
        logger.info("Skipping %s (already present)", label)
        return Receipt.skip(adapter=adapter, action_id=action_id, reason="already present")

    try:
        receipt = install_fn()
    except (DevstrapError, OSError) as e:
        receipt = Receipt.failure(adapter=adapter, action_id=action_id, error=str(e))

    if receipt.failed:
        error = receipt.error or "unknown error"
        if not tolerant:
            raise StepFailedError(label, error)
        logger.warning("%s failed (continuing): %s", label, error)

    return receipt
