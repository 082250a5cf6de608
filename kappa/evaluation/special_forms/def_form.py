from kappa import EvaluatorFn
from kappa import SExpression, LispValue
from kappa.errors import KappaMalformedSpecialForm
from kappa.types.environment import Environment
from kappa.types.symbol import Symbol


def def_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (def name) or (def name value)
    Always writes the global Var, wherever it appears, and returns `name`.
    (def name) creates the Var without binding it.
    """
    if len(tail) not in (1, 2):
        raise KappaMalformedSpecialForm("def requires a name and at most one value")

    name = tail[0]
    if not isinstance(name, Symbol):
        raise KappaMalformedSpecialForm(f"First argument to def must be a Symbol, got {name}")

    if len(tail) == 1:
        env.registry.intern(name)
        return name

    value = evaluate_fn(tail[1], env)  # normal evaluation
    env.registry.define(name, value)
    return name
