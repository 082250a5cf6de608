from kappa import EvaluatorFn
from kappa import SExpression, LispValue
from kappa.errors import KappaMalformedSpecialForm, KappaTypeError
from kappa.evaluation.apply import apply as apply_engine
from kappa.types.environment import Environment
from kappa.types.nil import Nil
from kappa.types.persistent_list import PersistentList


def apply_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (apply f arg* coll)
    Evaluates every operand left to right, spreads the final collection onto
    the end of the argument list and delegates to the application engine.
    Macros cannot be applied.
    """
    if len(tail) < 2:
        raise KappaMalformedSpecialForm("apply expects a function and an argument collection")

    fn_val = evaluate_fn(tail[0], env)
    values = [evaluate_fn(arg, env) for arg in tail[1:]]

    spread = values.pop()
    if spread is Nil:
        spread = ()
    if not isinstance(spread, (PersistentList, tuple)):
        raise KappaTypeError("Last argument to apply must be a list or vector")

    return apply_engine(fn_val, values + list(spread), env, evaluate_fn)
