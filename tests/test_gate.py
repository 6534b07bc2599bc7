"""
Tests for the existence-gated installer.
"""

import pytest

from devstrap.core.engine.gate import ensure_installed
from devstrap.core.errors import FetchError, StepFailedError
from devstrap.core.models.action import Receipt


class _Install:
    def __init__(self, receipt: Receipt | None = None, raises: Exception | None = None):
        self.calls = 0
        self._receipt = receipt or Receipt.success(adapter="t", action_id="x")
        self._raises = raises

    def __call__(self) -> Receipt:
        self.calls += 1
        if self._raises is not None:
            raise self._raises
        return self._receipt


class TestEnsureInstalled:
    def test_true_probe_never_calls_action(self):
        install = _Install()
        receipt = ensure_installed(lambda: True, install, label="brew")
        assert install.calls == 0
        assert receipt.skipped
        assert receipt.output == "already present"

    def test_false_probe_calls_action_once(self):
        install = _Install()
        receipt = ensure_installed(lambda: False, install, label="brew")
        assert install.calls == 1
        assert receipt.ok

    def test_failure_raises_when_not_tolerant(self):
        install = _Install(Receipt.failure(adapter="t", action_id="x", error="boom"))
        with pytest.raises(StepFailedError) as exc:
            ensure_installed(lambda: False, install, label="nodejs")
        assert exc.value.label == "nodejs"
        assert exc.value.error == "boom"
        assert install.calls == 1

    def test_tolerant_failure_returns_receipt(self, caplog):
        install = _Install(Receipt.failure(adapter="t", action_id="x", error="boom"))
        receipt = ensure_installed(lambda: False, install, tolerant=True, label="plugin")
        assert receipt.failed
        assert "plugin failed (continuing): boom" in caplog.text

    def test_raised_error_becomes_failure(self):
        install = _Install(raises=FetchError("offline"))
        receipt = ensure_installed(lambda: False, install, tolerant=True, label="font")
        assert receipt.failed
        assert receipt.error == "offline"

    def test_raised_oserror_is_fatal(self):
        install = _Install(raises=PermissionError("denied"))
        with pytest.raises(StepFailedError, match="denied"):
            ensure_installed(lambda: False, install, label="rc")
