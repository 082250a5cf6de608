"""Function and macro values."""

from __future__ import annotations

from io import StringIO
from typing import Optional

from kappa.types.arity import ArityTable
from kappa.types.environment import Environment
from kappa.types.symbol import Symbol


class Closure:
    """Arity table, optional self-name and the environment captured at creation.

    Function and Macro share this shape and differ only in how the evaluator
    calls them.
    """

    __slots__ = ("arities", "name", "env")

    kind = "fn"

    def __init__(self, arities: ArityTable, env: Environment, name: Optional[Symbol] = None):
        self.arities: ArityTable = arities
        self.name: Optional[Symbol] = name
        self.env: Environment = env

    @property
    def display_name(self) -> str:
        return str(self.name) if self.name is not None else "anonymous"

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(f"({self.kind}")
            if self.name is not None:
                buffer.write(f" {self.name}")
            for b in self.arities:
                buffer.write(f" {b.signature()}")
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.display_name}>"


class Function(Closure):
    """A closure created by `fn`: arguments are evaluated before the call."""

    __slots__ = ()
    kind = "fn"


class Macro(Closure):
    """A closure created by `defmacro`: receives its argument forms unevaluated."""

    __slots__ = ()
    kind = "macro"
