import pytest

from kappa.errors import KappaArityMismatch, KappaNotInvocable
from kappa.types.function import Macro
from kappa.types.nil import Nil
from kappa.types.symbol import Symbol


def test_defmacro_returns_name_and_binds_var(interp):
    assert interp.eval("(defmacro testMacro [] 3)") == Symbol("testMacro")
    assert isinstance(interp.lookup_var("testMacro"), Macro)


def test_macro_return_value(interp):
    interp.eval("(defmacro testMacro [] 3)")
    assert interp.eval("(testMacro)") == 3


def test_macro_body_evaluation(interp, output):
    interp.eval('(defmacro testMacro [] (.print "first") (.print "second") (.print "third") 1.2345)')
    assert interp.eval("(testMacro)") == 1.2345
    assert output.text == "firstsecondthird"


def test_macro_output_evaluation(interp):
    """The expansion is evaluated, not returned as data."""
    interp.eval("(defmacro testMacro [] (.list .+ 500 200))")
    assert interp.eval("(testMacro)") == 700


def test_macro_output_with_args(interp):
    interp.eval("(def a 11)")
    interp.eval("(defmacro testMacro [b] (.list .+ a b))")
    assert interp.eval("(testMacro 12)") == 23


def test_macro_parameters_are_unevaluated(interp, output):
    interp.eval("(defmacro testMacro [a b] (.print a) (.print b) nil)")
    assert interp.eval("(testMacro (+ 1 2) [(+ 3 4) 5])") is Nil
    assert output.text == "(+ 1 2)[(+ 3 4) 5]"


def test_macro_untouched_param(interp, output):
    """Only the branch the macro picks is ever evaluated."""
    interp.eval("(defmacro testMacro [pred then else] (if pred then else))")
    assert interp.eval('(testMacro true (do (.print "good") 123) (.print "bad"))') == 123
    assert output.text == "good"


def test_binding_hierarchy(interp):
    interp.eval("(def a 187)")
    interp.eval("(let [b 51] (defmacro testMacro [c] (.+ (.+ a b) c)))")
    assert interp.eval("(testMacro 91200)") == 91438


def test_binding_shadowing(interp):
    interp.eval("(def a 187)")
    interp.eval("(let [b 51] (defmacro testMacro [a b c] (.+ (.+ a b) c)))")
    assert interp.eval("(testMacro 100 201 512)") == 813


def test_macro_var_capture(interp):
    interp.eval("(defmacro testMacro [] a)")
    interp.eval("(def a 500)")
    assert interp.eval("(testMacro)") == 500
    interp.eval("(def a false)")
    assert interp.eval("(testMacro)") is False


def test_macro_symbol_capture(interp):
    """A free symbol with no lexical binding resolves to the current Var."""
    interp.eval('(def b "hello")')
    interp.eval("(defmacro testMacro [a] (.list .+ a b))")
    interp.eval("(def b 125)")
    assert interp.eval("(testMacro 6)") == 131
    interp.eval("(def b 918)")
    assert interp.eval("(testMacro 6)") == 924


def test_macro_binding_capture(interp):
    """A free symbol bound by an enclosing let keeps its definition-time value."""
    interp.eval("(let [b 51] (defmacro testMacro [a] (.list .+ a b)))")
    interp.eval("(def b 125)")
    assert interp.eval("(testMacro 6)") == 57
    interp.eval("(def b 918)")
    assert interp.eval("(testMacro 6)") == 57


def test_expansion_evaluated_in_caller_env(interp):
    """Symbols in the expansion resolve where the macro is used."""
    interp.eval("(let [x 1] (defmacro get-x [] 'x))")
    assert interp.eval("(let [x 99] (get-x))") == 99


def test_multi_arity_macro(interp):
    interp.eval("(defmacro m ([] 0) ([a] a) ([a & more] (.count more)))")
    assert interp.eval("(m)") == 0
    assert interp.eval("(m 7)") == 7
    assert interp.eval("(m 7 8 9)") == 2


def test_macro_arity_mismatch(interp):
    interp.eval("(defmacro two [a b] a)")
    with pytest.raises(KappaArityMismatch):
        interp.eval("(two 1)")


def test_syntax_quote_macro(interp, output):
    interp.eval("(defmacro unless [test & body] `(if ~test nil (do ~@body)))")
    assert interp.eval('(unless false (.print "ran") 5)') == 5
    assert interp.eval('(unless true (.print "skipped") 5)') is Nil
    assert output.text == "ran"


def test_macro_calling_macro(interp):
    interp.eval("(defmacro my-if [c t e] `(if ~c ~t ~e))")
    interp.eval("(defmacro my-when [c & body] `(my-if ~c (do ~@body) nil))")
    assert interp.eval("(my-when true 1 2 3)") == 3


def test_macro_is_not_a_function_value(interp):
    interp.eval("(defmacro m [] 1)")
    with pytest.raises(KappaNotInvocable):
        interp.eval("(apply m [])")


def test_macro_body_sees_its_own_name(interp):
    """Inside its body a macro's name refers to the macro, not an enclosing let."""
    interp.eval("(let [m 0] (defmacro m ([] 1) ([x] (m))))")
    assert interp.eval("(m 5)") == 1


def test_macro_arity_error_names_the_macro(interp):
    interp.eval("(defmacro two [a b] a)")
    outcome = interp.run("(two 1)")
    assert "two" in str(outcome.error)
