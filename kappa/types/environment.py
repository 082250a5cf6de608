"""Runtime environment for Kappa.

An Environment is one lexical frame: a mapping from Symbols to values plus an
`outer` link. Lookups walk the chain innermost first and, when the chain is
exhausted, fall through to the Var registry the chain was built on.

Frames are only extended while the construct that created them is binding
(`let`, argument binding). Once a closure has captured a frame, nothing writes
to it again; new scopes always get a new child frame.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from kappa import LispValue
from kappa.errors import KappaInvalidSymbol
from kappa.types.symbol import Symbol
from kappa.types.var import VarRegistry, get_registry


class Environment:
    """Hierarchical mapping from Symbols to Lisp values over a Var registry."""

    __slots__ = ("vars", "outer", "registry")

    def __init__(
        self,
        outer: Optional[Environment] = None,
        registry: Optional[VarRegistry] = None,
    ):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer
        if registry is None:
            registry = outer.registry if outer is not None else get_registry()
        self.registry: VarRegistry = registry

    def child(self) -> Environment:
        """Return a new empty frame chained onto this one."""
        return Environment(outer=self, registry=self.registry)

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this frame only.

        Bindings in enclosing frames are shadowed, never rewritten.
        Raises KappaInvalidSymbol if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise KappaInvalidSymbol(f"Cannot bind {name!r}, not a symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest frame in the chain that binds `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`.

        Order of resolution:
        1) Lexical chain, innermost frame first
        2) Var registry (current value at the time of the call)
        Raises KappaUnboundSymbol if neither binds it.
        """
        env = self.find(name)
        if env is not None:
            return env.vars[name]
        return self.registry.lookup(name)

    def depth(self) -> int:
        """Number of lexical frames in the chain, this one included."""
        n = 0
        env: Optional[Environment] = self
        while env is not None:
            n += 1
            env = env.outer
        return n

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as env_buf:
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
            env = env.outer
        return f"<Environment chain: {' -> '.join(chain)} -> vars>"
