"""VCS adapters — git."""

from devstrap.adapters.vcs.git import GitAdapter

__all__ = ["GitAdapter"]
