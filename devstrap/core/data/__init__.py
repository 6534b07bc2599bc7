"""
L0 Data — ``__init__.py`` re-exports the bundled file contents.
"""

from devstrap.core.data.bundled import STARSHIP_TOML, TMUX_CONF, TMUX_HELPERS  # noqa: F401
