from kappa import EvaluatorFn
from kappa import SExpression, LispValue
from kappa.errors import KappaMalformedSpecialForm
from kappa.evaluation.apply import evaluate_body
from kappa.types.environment import Environment
from kappa.types.symbol import Symbol


def let_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (let [name1 val1 name2 val2 ...] body...)

    Each binding gets its own frame chained onto the previous one, so later
    values see earlier names and a closure made mid-way only captures the
    bindings before it.
    """
    if not tail:
        raise KappaMalformedSpecialForm("let requires a binding vector")

    bindings = tail[0]
    body = tail[1:]

    if not isinstance(bindings, tuple):
        raise KappaMalformedSpecialForm(f"let bindings must be a vector, got {bindings}")
    if len(bindings) % 2 != 0:
        raise KappaMalformedSpecialForm("let requires an even number of forms in its binding vector")

    scope = env
    for name, value_expr in zip(bindings[::2], bindings[1::2]):
        if not isinstance(name, Symbol):
            raise KappaMalformedSpecialForm(f"let binding name must be a Symbol, got {name}")
        value = evaluate_fn(value_expr, scope)
        scope = scope.child()
        scope.define(name, value)

    if scope is env:
        scope = env.child()
    return evaluate_body(body, scope, evaluate_fn)
