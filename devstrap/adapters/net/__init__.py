"""Network adapters — HTTP downloads."""

from devstrap.adapters.net.fetch import FetchAdapter

__all__ = ["FetchAdapter"]
