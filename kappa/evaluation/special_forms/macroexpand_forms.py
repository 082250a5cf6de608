"""Special forms that expose the macro expander to Lisp code.

macroexpand-1: expand a single step at the head position if it is a macro.
macroexpand:   expand the head position repeatedly until it is not a macro.

Both evaluate their argument to obtain the form, as in Clojure:

    (macroexpand-1 '(unless ok (.print "no")))

and return the expansion without evaluating it. Subforms are not expanded.
"""

from kappa import SExpression, EvaluatorFn
from kappa.errors import KappaMalformedSpecialForm
from kappa.evaluation.macro_expander import expand_1, expand_head
from kappa.types.environment import Environment
from kappa.types.persistent_list import PersistentList


def _is_special(form: SExpression) -> bool:
    # Imported here: this module is loaded while the table is being built
    from kappa.evaluation.special_forms import SPECIAL_FORMS

    return isinstance(form, PersistentList) and not form.is_empty() and form.first in SPECIAL_FORMS


def macroexpand1_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn):
    """(macroexpand-1 form): expand the head macro once and return the result."""
    if len(tail) != 1:
        raise KappaMalformedSpecialForm("macroexpand-1 expects exactly 1 argument")
    form = evaluate_fn(tail[0], env)
    if _is_special(form):
        return form
    return expand_1(form, env, evaluate_fn)


def macroexpand_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn):
    """(macroexpand form): expand the head macro to a fixpoint and return the result."""
    if len(tail) != 1:
        raise KappaMalformedSpecialForm("macroexpand expects exactly 1 argument")
    form = evaluate_fn(tail[0], env)
    if _is_special(form):
        return form
    return expand_head(form, env, evaluate_fn)
