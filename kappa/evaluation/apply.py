"""Application engine for Kappa.

This module centralizes call semantics for the interpreter:
- Selection of the arity body for the supplied argument count.
- Binding of arguments in a fresh frame chained onto the callee's captured
  environment (never the caller's).
- Sequential evaluation of body forms, returning the last value.
- Application of native built-ins registered as Vars.

Keeping this logic in one place prevents duplication between the evaluator,
the macro expander and the `apply` special form.
"""

from __future__ import annotations

from typing import Iterable

from kappa import EvaluatorFn, LispValue, SExpression
from kappa.errors import KappaNotInvocable
from kappa.printer import to_lisp_string
from kappa.types.bind import bind_arguments
from kappa.types.builtin import BuiltIn
from kappa.types.environment import Environment
from kappa.types.function import Function, Macro
from kappa.types.nil import Nil


def evaluate_body(
    forms: Iterable[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    """Evaluate `forms` in order and return the last value (nil if there are none)."""
    result: LispValue = Nil
    for form in forms:
        result = evaluate_fn(form, env)
    return result


def apply_function(
    fn: Function, args: list[LispValue], evaluate_fn: EvaluatorFn
) -> LispValue:
    """Apply a Kappa Function to already-evaluated arguments.

    The result is returned as-is; a returned list is data, not a new call.
    """
    body = fn.arities.select(len(args), fn.display_name)
    call_env = bind_arguments(fn, body, args)
    return evaluate_body(body.body, call_env, evaluate_fn)


def apply(
    head: Function | BuiltIn | object,
    args: list[LispValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a Function or a BuiltIn.

    - Functions are delegated to apply_function.
    - Built-ins are invoked with the caller's env and the argument list; any
      exception they raise propagates unchanged.
    - Otherwise, raise KappaNotInvocable.
    """
    if isinstance(head, Function):
        return apply_function(head, args, evaluate_fn)
    if isinstance(head, BuiltIn):
        return head(env, args)
    if isinstance(head, Macro):
        raise KappaNotInvocable(f"Can't take value of a macro: {head.display_name}")
    raise KappaNotInvocable(f"{to_lisp_string(head)} cannot be used as a function")
