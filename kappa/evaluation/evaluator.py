"""Core evaluator for the Kappa interpreter.

Reduces a form to a value in an environment:
- symbols resolve through the lexical chain, then the Var registry;
- lists are calls: special forms first, then the operator is evaluated and
  its value decides the protocol (Function/BuiltIn or Macro);
- vectors evaluate element-wise;
- everything else evaluates to itself.
"""

from __future__ import annotations

from typing import Optional

from kappa import SExpression, LispValue
from kappa.errors import KappaNotInvocable
from kappa.evaluation.apply import apply
from kappa.evaluation.macro_expander import expand
from kappa.evaluation.special_forms import SPECIAL_FORMS
from kappa.printer import to_lisp_string
from kappa.types.builtin import BuiltIn
from kappa.types.environment import Environment
from kappa.types.function import Function, Macro
from kappa.types.persistent_list import PersistentList
from kappa.types.symbol import Symbol
from kappa.types.var import get_registry


def evaluate(expr: SExpression, env: Optional[Environment] = None) -> LispValue:
    """
    Evaluate `expr` in `env`, or at top level over the process-wide registry.
    Errors propagate to the caller; side effects already performed remain.
    """
    if env is None:
        env = Environment(registry=get_registry())
    return evaluate0(expr, env)


def evaluate0(expr: SExpression, env: Environment) -> LispValue:
    """Single recursive evaluation step used by special forms and the expander."""
    match expr:
        case Symbol():
            return env.lookup(expr)

        case PersistentList() if expr.is_empty():
            return expr

        case PersistentList():
            head = expr.first
            tail_args = list(expr.rest)

            # --- Special forms handling ---
            if isinstance(head, Symbol) and head in SPECIAL_FORMS:
                return SPECIAL_FORMS[head](tail_args, env, evaluate0)

            op = evaluate0(head, env)

            # Macro: expand through its captured env, evaluate the expansion here.
            if isinstance(op, Macro):
                expansion = expand(op, tail_args, evaluate0)
                return evaluate0(expansion, env)

            # Function / built-in: arguments strictly left to right, in the caller's env.
            if isinstance(op, (Function, BuiltIn)):
                args = [evaluate0(arg, env) for arg in tail_args]
                return apply(op, args, env, evaluate0)

            raise KappaNotInvocable(f"{to_lisp_string(op)} cannot be used as a function")

        case tuple():
            return tuple(evaluate0(item, env) for item in expr)

    # --- Atoms return as-is ---
    return expr
