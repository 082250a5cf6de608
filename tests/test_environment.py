import threading

import pytest

from kappa.errors import KappaInvalidSymbol, KappaUnboundSymbol
from kappa.types.environment import Environment
from kappa.types.symbol import Symbol
from kappa.types.var import Var, VarRegistry


@pytest.fixture
def registry():
    return VarRegistry()


@pytest.fixture
def root(registry):
    return Environment(registry=registry)


def test_lookup_walks_innermost_first(root):
    root.define(Symbol("a"), 1)
    inner = root.child()
    inner.define(Symbol("a"), 2)
    innermost = inner.child()
    assert innermost.lookup(Symbol("a")) == 2
    assert root.lookup(Symbol("a")) == 1


def test_define_only_touches_current_frame(root):
    root.define(Symbol("a"), 1)
    inner = root.child()
    inner.define(Symbol("a"), 99)
    assert root.vars[Symbol("a")] == 1
    assert inner.find(Symbol("a")) is inner
    assert root.find(Symbol("a")) is root


def test_falls_through_to_var_registry(registry, root):
    registry.define(Symbol("g"), "global")
    assert root.child().child().lookup(Symbol("g")) == "global"


def test_lexical_binding_beats_var(registry, root):
    registry.define(Symbol("g"), "global")
    inner = root.child()
    inner.define(Symbol("g"), "local")
    assert inner.lookup(Symbol("g")) == "local"


def test_unbound_symbol(root):
    with pytest.raises(KappaUnboundSymbol):
        root.lookup(Symbol("missing"))


def test_define_rejects_non_symbols(root):
    with pytest.raises(KappaInvalidSymbol):
        root.define("a", 1)


def test_child_shares_registry(registry, root):
    assert root.child().registry is registry
    assert root.child().depth() == 2


def test_environment_repr_mentions_bindings(root):
    inner = root.child()
    inner.define(Symbol("a"), 1)
    assert "a: 1" in repr(inner)
    assert str(inner).endswith("-> ...")


# -----------------------------------------------------
# Var registry
# -----------------------------------------------------

def test_var_late_binding(registry):
    registry.define(Symbol("x"), 1)
    var = registry.find(Symbol("x"))
    registry.define(Symbol("x"), 2)
    assert registry.find(Symbol("x")) is var
    assert registry.lookup(Symbol("x")) == 2


def test_intern_creates_unbound_var(registry):
    var = registry.intern(Symbol("later"))
    assert isinstance(var, Var)
    assert not var.is_bound
    assert Symbol("later") not in registry
    with pytest.raises(KappaUnboundSymbol):
        registry.lookup(Symbol("later"))
    registry.define(Symbol("later"), 3)
    assert var.is_bound and var.deref() == 3


def test_intern_rejects_non_symbols(registry):
    with pytest.raises(KappaInvalidSymbol):
        registry.intern("x")


def test_gensyms_are_unique(registry):
    a = registry.gen_sym()
    b = registry.gen_sym()
    assert a != b
    assert a.id.startswith("G__")


def test_concurrent_defs_last_writer_wins(registry):
    sym = Symbol("counter")

    def writer(n):
        for i in range(200):
            registry.define(sym, (n, i))

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(registry) == 1
    assert registry.lookup(sym)[1] == 199
