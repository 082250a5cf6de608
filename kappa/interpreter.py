from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from kappa import LispValue
from kappa.builtin.env_builtin import register
from kappa.config import get_recursion_limit
from kappa.errors import ErrorKind, error_kind
from kappa.evaluation.evaluator import evaluate
from kappa.reader.parser import TokenStream, lex
from kappa.types.environment import Environment
from kappa.types.nil import Nil
from kappa.types.symbol import Symbol
from kappa.types.var import VarRegistry


@dataclass
class EvalOutcome:
    """Result of Interpreter.run: a value, or the error that aborted evaluation."""

    value: LispValue = Nil
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return None if self.error is None else error_kind(self.error)


class Interpreter:
    """
    Orchestrates reading and evaluating Kappa code.
    Owns a top-level environment over a Var registry; both persist across
    calls. Built-ins are seeded only into an empty registry, so several
    interpreters can share one registry without redefining each other's
    primitives; `.print` then writes through the seeding interpreter.

    `prelude` is None for no prelude, 'auto' to load KAPPA_PRELUDE_PATH, or
    source code to evaluate (an empty string evaluates nothing).

    Output from `.print` goes through `write_output`, which may be replaced at
    any time (e.g. with a buffer in tests).
    """

    def __init__(
        self,
        registry: Optional[VarRegistry] = None,
        write_output: Optional[Callable[[str], None]] = None,
        prelude: str | None | Literal['auto'] = 'auto',
    ):
        self.registry: VarRegistry = registry if registry is not None else VarRegistry()
        self.env: Environment = Environment(registry=self.registry)
        self.write_output: Callable[[str], None] = write_output or sys.stdout.write
        if not len(self.registry):
            register(self.registry, self._write)

        limit = get_recursion_limit()
        if limit is not None and limit > sys.getrecursionlimit():
            sys.setrecursionlimit(limit)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            # Lazy import to avoid circular imports
            from kappa.modules.prelude_loader import load_prelude
            load_prelude(self)
        else:
            self.eval_prelude(prelude)

    def _write(self, text: str) -> None:
        self.write_output(text)

    def define_var(self, name: Symbol | str, value: LispValue) -> None:
        """Bind a global Var, e.g. to bootstrap host functions before user code runs."""
        self.registry.define(Symbol(name) if isinstance(name, str) else name, value)

    def lookup_var(self, name: Symbol | str) -> LispValue:
        return self.registry.lookup(Symbol(name) if isinstance(name, str) else name)

    def eval_prelude(self, code: str) -> None:
        stream = TokenStream(lex(code))
        while (expr := stream.parse_expr()) is not None:
            evaluate(expr, self.env)

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code`.

        Returns Nil for no forms, the value for one form, or a Python list of
        values for several. Errors propagate.
        """
        stream = TokenStream(lex(code))
        results: list[LispValue] = []
        while (expr := stream.parse_expr()) is not None:
            results.append(evaluate(expr, self.env))
        if not results:
            return Nil
        if len(results) == 1:
            return results[0]
        return results

    def run(self, code: str) -> EvalOutcome:
        """Evaluate `code` and report the last value or the first error as a tagged outcome.

        Forms before the failing one stay evaluated, output they wrote stays written.
        """
        value: LispValue = Nil
        try:
            stream = TokenStream(lex(code))
            while (expr := stream.parse_expr()) is not None:
                value = evaluate(expr, self.env)
        except Exception as exc:  # built-ins may raise any native error
            return EvalOutcome(error=exc)
        return EvalOutcome(value=value)
