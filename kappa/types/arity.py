"""Arity bodies and per-callable dispatch tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from kappa import SExpression
from kappa.errors import KappaArityMismatch, KappaMalformedSpecialForm
from kappa.types.persistent_list import PersistentList
from kappa.types.symbol import Symbol

logger = logging.getLogger(__name__)

VARIADIC_MARKER = Symbol("&")


@dataclass(frozen=True)
class ArityBody:
    """One parameter-vector/body pair.

    `params` are the fixed parameters; `variadic` names the parameter that
    receives any remaining arguments as a list, or is None.
    """

    params: tuple[Symbol, ...]
    variadic: Optional[Symbol]
    body: tuple[SExpression, ...]

    @property
    def fixed_count(self) -> int:
        return len(self.params)

    @property
    def is_variadic(self) -> bool:
        return self.variadic is not None

    def accepts(self, argc: int) -> bool:
        if self.is_variadic:
            return argc >= self.fixed_count
        return argc == self.fixed_count

    def signature(self) -> str:
        names = [str(p) for p in self.params]
        if self.variadic is not None:
            names += ["&", str(self.variadic)]
        return "[" + " ".join(names) + "]"

    @classmethod
    def parse(cls, params: SExpression, body: tuple[SExpression, ...], form: str) -> ArityBody:
        """Build an ArityBody from a parameter vector such as `[a b & more]`."""
        if not isinstance(params, tuple):
            raise KappaMalformedSpecialForm(f"{form}: parameter list must be a vector, got {params}")
        fixed: list[Symbol] = []
        variadic: Optional[Symbol] = None
        i = 0
        while i < len(params):
            p = params[i]
            if not isinstance(p, Symbol):
                raise KappaMalformedSpecialForm(f"{form}: parameter {p!r} is not a symbol")
            if p == VARIADIC_MARKER:
                rest = params[i + 1:]
                if len(rest) != 1 or not isinstance(rest[0], Symbol) or rest[0] == VARIADIC_MARKER:
                    raise KappaMalformedSpecialForm(f"{form}: '&' must be followed by exactly one symbol")
                variadic = rest[0]
                break
            fixed.append(p)
            i += 1
        return cls(tuple(fixed), variadic, tuple(body))


class ArityTable:
    """Ordered arity bodies of one function or macro."""

    __slots__ = ("bodies",)

    def __init__(self, bodies: list[ArityBody]):
        if not bodies:
            raise KappaMalformedSpecialForm("A function needs at least one arity body")
        seen: set[int] = set()
        for b in bodies:
            if b.is_variadic:
                continue
            if b.fixed_count in seen:
                raise KappaMalformedSpecialForm(
                    f"Can't have two bodies with the same arity ({b.fixed_count})"
                )
            seen.add(b.fixed_count)
        self.bodies: tuple[ArityBody, ...] = tuple(bodies)

    @classmethod
    def from_forms(cls, forms: list[SExpression], form: str) -> ArityTable:
        """Parse either `[params] body...` or `([params] body...)+`."""
        if not forms:
            raise KappaMalformedSpecialForm(f"{form} requires a parameter vector")
        if isinstance(forms[0], tuple):
            return cls([ArityBody.parse(forms[0], tuple(forms[1:]), form)])
        bodies = []
        for clause in forms:
            if not isinstance(clause, PersistentList) or clause.is_empty():
                raise KappaMalformedSpecialForm(
                    f"{form}: expected ([params] body...) clause, got {clause}"
                )
            bodies.append(ArityBody.parse(clause.first, tuple(clause.rest), form))
        return cls(bodies)

    def select(self, argc: int, name: str = "fn") -> ArityBody:
        """Pick the body for `argc` arguments.

        An exact fixed-arity match wins; otherwise the first declared variadic
        body whose fixed prefix fits.
        """
        for b in self.bodies:
            if not b.is_variadic and b.fixed_count == argc:
                return b
        for b in self.bodies:
            if b.is_variadic and b.fixed_count <= argc:
                return b
        logger.debug("no arity of %s accepts %d args", name, argc)
        raise KappaArityMismatch(
            f"Wrong number of args ({argc}) passed to {name}; "
            f"accepts {' '.join(b.signature() for b in self.bodies)}"
        )

    def __iter__(self) -> Iterator[ArityBody]:
        return iter(self.bodies)

    def __len__(self) -> int:
        return len(self.bodies)
