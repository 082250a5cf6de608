from kappa import EvaluatorFn
from kappa import SExpression, LispValue
from kappa.errors import KappaMalformedSpecialForm
from kappa.types.environment import Environment


def eval_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(eval expr): evaluate expr to a form, then evaluate that form here."""
    if len(tail) != 1:
        raise KappaMalformedSpecialForm("eval expects exactly 1 argument")
    form = evaluate_fn(tail[0], env)
    return evaluate_fn(form, env)
