"""Macro expansion.

A macro call runs in two environments. The macro body is evaluated in a frame
chained onto the macro's *captured* environment, with the argument forms bound
unevaluated; free symbols in the body therefore see the `let` bindings that
surrounded the `defmacro` and, beyond those, the current Vars. The expansion it
returns is handed back to the evaluator, which evaluates it in the *caller's*
environment.
"""

from __future__ import annotations

import logging
from typing import Optional

from kappa import EvaluatorFn, SExpression
from kappa.evaluation.apply import evaluate_body
from kappa.printer import to_lisp_string
from kappa.types.bind import bind_arguments
from kappa.types.environment import Environment
from kappa.types.function import Macro
from kappa.types.persistent_list import PersistentList
from kappa.types.symbol import Symbol

logger = logging.getLogger(__name__)


def expand(macro: Macro, arg_forms: list[SExpression], evaluate_fn: EvaluatorFn) -> SExpression:
    """
    Canonical macro invocation:
    - Bind raw, unevaluated argument forms to the selected arity body.
    - Evaluate the body once to produce an expansion form.
    - Do NOT evaluate the returned expansion here; just return it.
    """
    body = macro.arities.select(len(arg_forms), macro.display_name)
    call_env = bind_arguments(macro, body, list(arg_forms))
    expansion = evaluate_body(body.body, call_env, evaluate_fn)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("expanded %s -> %s", macro.display_name, to_lisp_string(expansion))
    return expansion


def macro_for(form: SExpression, env: Environment) -> Optional[Macro]:
    """Return the macro named by `form`'s head, or None if it is not a macro call.

    Resolution never raises: an unbound head simply means "not a macro".
    """
    if not isinstance(form, PersistentList) or form.is_empty():
        return None
    head = form.first
    if isinstance(head, Macro):
        return head
    if not isinstance(head, Symbol):
        return None
    frame = env.find(head)
    if frame is not None:
        value = frame.vars[head]
    else:
        var = env.registry.find(head)
        if var is None or not var.is_bound:
            return None
        value = var.deref()
    return value if isinstance(value, Macro) else None


def expand_1(form: SExpression, env: Environment, evaluate_fn: EvaluatorFn) -> SExpression:
    """Expand only the head-position macro if present."""
    macro = macro_for(form, env)
    if macro is None:
        return form  # Not a macro call, unchanged
    return expand(macro, list(form.rest), evaluate_fn)


def expand_head(form: SExpression, env: Environment, evaluate_fn: EvaluatorFn) -> SExpression:
    """Expand the head position repeatedly until it is no longer a macro call."""
    cur = form
    while (macro := macro_for(cur, env)) is not None:
        cur = expand(macro, list(cur.rest), evaluate_fn)
    return cur
