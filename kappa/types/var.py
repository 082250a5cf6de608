"""Global Var registry.

A Var is a named, mutable cell that outlives every lexical scope. The first
`def` of a symbol creates its Var; later `def`s overwrite the same cell, so any
closure that reads the symbol late sees the newest value.
"""

from __future__ import annotations

import logging
import threading
from itertools import count
from typing import Iterator, Optional

from kappa import LispValue
from kappa.errors import KappaInvalidSymbol, KappaUnboundSymbol
from kappa.types.symbol import Symbol

logger = logging.getLogger(__name__)

_UNBOUND = object()


class Var:
    __slots__ = ("symbol", "_value")

    def __init__(self, symbol: Symbol, value: LispValue = _UNBOUND):
        self.symbol = symbol
        self._value = value

    @property
    def is_bound(self) -> bool:
        return self._value is not _UNBOUND

    def deref(self) -> LispValue:
        if self._value is _UNBOUND:
            raise KappaUnboundSymbol(f"Var {self.symbol} is unbound")
        return self._value

    def bind_root(self, value: LispValue) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f"#'{self.symbol}"


class VarRegistry:
    """Process-scoped symbol -> Var store with last-writer-wins updates."""

    def __init__(self):
        self._vars: dict[Symbol, Var] = {}
        self._lock = threading.RLock()
        self._gensym_counter = count(1)

    def intern(self, symbol: Symbol) -> Var:
        """Return the Var for `symbol`, creating an unbound one if needed."""
        if not isinstance(symbol, Symbol):
            raise KappaInvalidSymbol(f"Cannot intern {symbol!r} as a Var")
        with self._lock:
            var = self._vars.get(symbol)
            if var is None:
                var = Var(symbol)
                self._vars[symbol] = var
            return var

    def define(self, symbol: Symbol, value: LispValue) -> Var:
        """Create or overwrite the Var named `symbol`."""
        with self._lock:
            var = self.intern(symbol)
            var.bind_root(value)
        logger.debug("def %s", symbol)
        return var

    def find(self, symbol: Symbol) -> Optional[Var]:
        return self._vars.get(symbol)

    def lookup(self, symbol: Symbol) -> LispValue:
        var = self._vars.get(symbol)
        if var is None:
            raise KappaUnboundSymbol(f"Unable to resolve symbol: {symbol}")
        return var.deref()

    def gen_sym(self, prefix: str = "G__") -> Symbol:
        return Symbol(f"{prefix}{next(self._gensym_counter)}")

    def __contains__(self, symbol: Symbol) -> bool:
        var = self._vars.get(symbol)
        return var is not None and var.is_bound

    def __iter__(self) -> Iterator[Symbol]:
        return iter(list(self._vars))

    def __len__(self) -> int:
        return len(self._vars)


# Module-level singleton
_registry: Optional[VarRegistry] = None


def get_registry() -> VarRegistry:
    global _registry
    if _registry is None:
        _registry = VarRegistry()
    return _registry
