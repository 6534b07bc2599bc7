"""devstrap — converge a developer workstation to a known state."""

__version__ = "0.1.0"
