import pytest

from kappa import errors
from kappa.evaluation.evaluator import evaluate
from kappa.types.builtin import BuiltIn
from kappa.types.environment import Environment
from kappa.types.function import Function
from kappa.types.nil import Nil
from kappa.types.persistent_list import EMPTY_LIST, plist
from kappa.types.symbol import Symbol
from kappa.types.var import VarRegistry

# -----------------------------------------------------
# Fixtures
# -----------------------------------------------------


@pytest.fixture
def registry():
    reg = VarRegistry()
    reg.define(Symbol("+"), BuiltIn("+", lambda _, args: sum(args)))
    reg.define(Symbol("-"), BuiltIn("-", lambda _, args: args[0] - sum(args[1:])))
    reg.define(Symbol("x"), 42)
    reg.define(Symbol("y"), 100)
    return reg


@pytest.fixture
def env(registry):
    return Environment(registry=registry)

# -----------------------------------------------------
# Tests
# -----------------------------------------------------


def test_self_evaluating_literals(env):
    assert evaluate(1, env) == 1
    assert evaluate(3.14, env) == 3.14
    assert evaluate("hello", env) == "hello"
    assert evaluate(True, env) is True
    assert evaluate(Nil, env) is Nil
    assert evaluate(EMPTY_LIST, env) is EMPTY_LIST


def test_symbol_lookup(env):
    assert evaluate(Symbol("x"), env) == 42
    assert evaluate(Symbol("y"), env) == 100
    with pytest.raises(errors.KappaUnboundSymbol):
        evaluate(Symbol("z"), env)


def test_vector_evaluates_elements(env):
    expr = (Symbol("x"), plist(Symbol("+"), 1, 2))
    assert evaluate(expr, env) == (42, 3)


def test_simple_expression(env):
    assert evaluate(plist(Symbol("+"), 1, 2), env) == 3


def test_fn_simple(env):
    expr = plist(Symbol("fn"), (Symbol("a"), Symbol("b")), plist(Symbol("+"), Symbol("a"), Symbol("b")))
    fn = evaluate(expr, env)
    assert isinstance(fn, Function)
    assert fn.env is env
    assert evaluate(plist(fn, 2, 3), env) == 5


def test_operator_position_is_evaluated(env):
    # ((fn [a] a) 7)
    expr = plist(plist(Symbol("fn"), (Symbol("a"),), Symbol("a")), 7)
    assert evaluate(expr, env) == 7


def test_not_invocable(env):
    with pytest.raises(errors.KappaNotInvocable):
        evaluate(plist(1, 2, 3), env)
    with pytest.raises(errors.KappaNotInvocable):
        evaluate(plist(Symbol("x")), env)


def test_builtin_errors_surface_unchanged(registry, env):
    def boom(_, args):
        raise ZeroDivisionError("boom")

    registry.define(Symbol("boom"), BuiltIn("boom", boom))
    with pytest.raises(ZeroDivisionError):
        evaluate(plist(Symbol("boom")), env)


def test_default_environment_uses_global_registry():
    from kappa.types.var import get_registry

    get_registry().define(Symbol("kappa-test-global"), 7)
    assert evaluate(Symbol("kappa-test-global")) == 7


def test_special_form_names_win_over_bindings(registry, env):
    registry.define(Symbol("if"), BuiltIn("if", lambda _, args: "shadowed"))
    assert evaluate(plist(Symbol("if"), True, 1, 2), env) == 1


def test_builtin_receives_caller_env(registry, env):
    seen = []
    registry.define(Symbol("capture"), BuiltIn("capture", lambda e, args: seen.append(e) or Nil))
    local = env.child()
    local.define(Symbol("q"), 1)
    evaluate(plist(Symbol("capture")), local)
    assert seen == [local]
