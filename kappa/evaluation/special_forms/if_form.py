from kappa import EvaluatorFn
from kappa import SExpression, LispValue
from kappa.errors import KappaMalformedSpecialForm
from kappa.types.environment import Environment
from kappa.types.nil import Nil, is_truthy


def if_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) not in (2, 3):
        raise KappaMalformedSpecialForm("if requires a condition, a then-form and an optional else-form")

    # Only the chosen branch is evaluated
    if is_truthy(evaluate_fn(tail[0], env)):
        return evaluate_fn(tail[1], env)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], env)
    else:
        return Nil
