from kappa import EvaluatorFn
from kappa import SExpression, LispValue
from kappa.errors import KappaMalformedSpecialForm
from kappa.types.arity import ArityTable
from kappa.types.environment import Environment
from kappa.types.function import Function
from kappa.types.symbol import Symbol


def fn_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    # (fn name? [params] body...) or (fn name? ([params] body...) ...)
    # A leading symbol names the function inside its own body.
    # The current frame chain is captured as-is; Vars stay late-bound.
    if not tail:
        raise KappaMalformedSpecialForm("fn requires a parameter vector")

    name = None
    if isinstance(tail[0], Symbol):
        name, tail = tail[0], tail[1:]

    return Function(ArityTable.from_forms(tail, "fn"), env, name)
