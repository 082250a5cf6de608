"""Special form: defmacro.

Defines a macro as a Var, with the same signature syntax as `fn`.
"""

from __future__ import annotations

from kappa import EvaluatorFn, SExpression, LispValue
from kappa.errors import KappaMalformedSpecialForm
from kappa.types.arity import ArityTable
from kappa.types.environment import Environment
from kappa.types.function import Macro
from kappa.types.symbol import Symbol


def defmacro_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Bind the Var named by the first argument to a new Macro and return the name."""
    if len(tail) < 2:
        raise KappaMalformedSpecialForm("defmacro requires a name and parameter vector")

    macro_name = tail[0]
    if not isinstance(macro_name, Symbol):
        raise KappaMalformedSpecialForm(f"Macro name must be a Symbol, got {macro_name}")

    # The macro captures the frame chain it was written in; like a named fn,
    # its own name is bound to itself while its body runs.
    macro = Macro(ArityTable.from_forms(tail[1:], "defmacro"), env, macro_name)
    env.registry.define(macro_name, macro)
    return macro_name
