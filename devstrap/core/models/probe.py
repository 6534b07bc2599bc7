"""
Probe model — a declarative presence check.

Probes are data, not callables, so a planned step can be logged and
compared in tests. ``devstrap.core.probes.evaluate`` runs them against
the run context.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

ProbeKind = Literal[
    "command",      # executable found on the context's search path
    "file",         # regular file exists at target
    "login_shell",  # basename of the user's login shell equals target
]


class Probe(BaseModel):
    kind: ProbeKind
    target: str = ""
    negate: bool = False

    def __str__(self) -> str:
        text = f"{self.kind}:{self.target}" if self.target else self.kind
        return f"not {text}" if self.negate else text

    @classmethod
    def command(cls, name: str) -> Probe:
        return cls(kind="command", target=name)

    @classmethod
    def file(cls, path: str) -> Probe:
        return cls(kind="file", target=path)

    @classmethod
    def login_shell(cls, name: str) -> Probe:
        return cls(kind="login_shell", target=name)
