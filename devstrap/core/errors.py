"""
Error taxonomy for a provisioning run.

Adapters never raise: they return failed receipts. These exceptions
exist for the layers above them (context building, the fetcher and
the existence gate) and are turned into exit codes by the CLI.
"""

from __future__ import annotations


class DevstrapError(Exception):
    """Base class for all devstrap errors."""


class UnsupportedPlatformError(DevstrapError):
    """The operating system is neither Linux nor macOS."""

    def __init__(self, system: str):
        self.system = system
        super().__init__(f"Unsupported OS: {system or '<unknown>'}")


class ConfigError(DevstrapError):
    """The settings file is unreadable or invalid."""


class FetchError(DevstrapError):
    """A download or archive extraction failed."""


class StepFailedError(DevstrapError):
    """A non-tolerant step failed; the run must stop."""

    def __init__(self, label: str, error: str):
        self.label = label
        self.error = error
        super().__init__(f"{label}: {error}")
