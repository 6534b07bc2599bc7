"""Shell adapters — commands, installer scripts and file operations."""

from devstrap.adapters.shell.command import ShellCommandAdapter
from devstrap.adapters.shell.filesystem import FilesystemAdapter

__all__ = ["FilesystemAdapter", "ShellCommandAdapter"]
