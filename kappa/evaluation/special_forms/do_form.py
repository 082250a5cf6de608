from kappa import EvaluatorFn
from kappa import SExpression, LispValue
from kappa.evaluation.apply import evaluate_body
from kappa.types.environment import Environment


def do_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    return evaluate_body(tail, env, evaluate_fn)
