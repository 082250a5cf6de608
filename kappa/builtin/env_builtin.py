"""Built-in functions for the Kappa runtime.

Primitives are dot-prefixed (`.+`, `.print`, ...) and registered as Vars so
that user code can shadow or redefine them like any other global. Every
procedure takes (env, args) with args already evaluated.
"""
from __future__ import annotations

from typing import Any, Callable

from kappa import LispValue
from kappa.errors import KappaArityMismatch, KappaTypeError
from kappa.printer import to_lisp_string
from kappa.types.builtin import BuiltIn
from kappa.types.environment import Environment
from kappa.types.nil import Nil, is_truthy
from kappa.types.persistent_list import EMPTY_LIST, PersistentList
from kappa.types.symbol import Symbol
from kappa.types.var import VarRegistry


def _check_numbers(name: str, args: list[LispValue]) -> None:
    for a in args:
        if isinstance(a, bool) or not isinstance(a, (int, float)):
            raise KappaTypeError(f"All arguments to {name} must be numbers, got {to_lisp_string(a)}")


def _require(name: str, args: list[LispValue], low: int, high: int | None = None) -> None:
    n = len(args)
    if n < low or (high is not None and n > high):
        raise KappaArityMismatch(f"Wrong number of args ({n}) passed to {name}")


def is_equal(a, b) -> bool:
    """Deep equality for Lisp values, element-wise for lists and vectors."""
    if a is b:
        return True
    if isinstance(a, (PersistentList, tuple)) and isinstance(b, (PersistentList, tuple)):
        if len(a) != len(b):
            return False
        return all(is_equal(x, y) for x, y in zip(a, b))
    if type(a) != type(b):
        return False
    return a == b


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, args: list[LispValue]) -> LispValue:
    """Return the numeric sum of all arguments; errors if any arg is non-numeric."""
    _check_numbers(".+", args)
    return sum(args)


def sub(env: Environment, args: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    _require(".-", args, 1)
    _check_numbers(".-", args)
    if len(args) == 1:
        return -args[0]
    result = args[0]
    for x in args[1:]:
        result -= x
    return result


def mul(env: Environment, args: list[LispValue]) -> LispValue:
    _check_numbers(".*", args)
    result = 1
    for x in args:
        result *= x
    return result


def div(env: Environment, args: list[LispValue]) -> LispValue:
    """Divide left-to-right; int results stay ints when the division is exact."""
    _require("./", args, 1)
    _check_numbers("./", args)
    if len(args) == 1:
        args = [1, *args]
    result = args[0]
    for x in args[1:]:
        if isinstance(result, int) and isinstance(x, int) and x != 0 and result % x == 0:
            result //= x
        else:
            result /= x
    return result


# -------------------------------
# Comparison
# -------------------------------
def equals(env: Environment, args: list[LispValue]) -> bool:
    _require(".=", args, 1)
    first = args[0]
    return all(is_equal(first, other) for other in args[1:])


def _comparison(name: str, op: Callable[[Any, Any], bool]) -> Callable[[Environment, list[LispValue]], bool]:
    def compare(env: Environment, args: list[LispValue]) -> bool:
        _require(name, args, 1)
        _check_numbers(name, args)
        return all(op(a, b) for a, b in zip(args, args[1:]))

    return compare


def logical_not(env: Environment, args: list[LispValue]) -> bool:
    _require(".not", args, 1, 1)
    return not is_truthy(args[0])


# -------------------------------
# Output
# -------------------------------
def make_print(write: Callable[[str], None], newline: bool = False):
    def print_(env: Environment, args: list[LispValue]) -> LispValue:
        """Write args separated by spaces, strings unquoted; returns nil."""
        text = " ".join(to_lisp_string(a, readable=False) for a in args)
        write(text + "\n" if newline else text)
        return Nil

    return print_


def str_(env: Environment, args: list[LispValue]) -> str:
    return "".join("" if a is Nil else to_lisp_string(a, readable=False) for a in args)


# -------------------------------
# Lists and vectors
# -------------------------------
def list_builtin(env: Environment, args: list[LispValue]) -> PersistentList:
    return PersistentList.from_iterable(args)


def vector_builtin(env: Environment, args: list[LispValue]) -> tuple:
    return tuple(args)


def cons(env: Environment, args: list[LispValue]) -> PersistentList:
    _require(".cons", args, 2, 2)
    head, tail = args
    if tail is Nil:
        return EMPTY_LIST.cons(head)
    if isinstance(tail, PersistentList):
        return tail.cons(head)
    if isinstance(tail, tuple):
        return PersistentList.from_iterable(tail).cons(head)
    raise KappaTypeError("Second argument to .cons must be a list, vector or nil")


def _as_seq(name: str, value: LispValue):
    if value is Nil:
        return EMPTY_LIST
    if isinstance(value, (PersistentList, tuple, str)):
        return value
    raise KappaTypeError(f"{name} expects a collection, got {to_lisp_string(value)}")


def first(env: Environment, args: list[LispValue]) -> LispValue:
    _require(".first", args, 1, 1)
    seq = _as_seq(".first", args[0])
    return seq[0] if len(seq) else Nil


def rest(env: Environment, args: list[LispValue]) -> PersistentList:
    _require(".rest", args, 1, 1)
    seq = _as_seq(".rest", args[0])
    if isinstance(seq, PersistentList):
        return seq.rest
    return PersistentList.from_iterable(seq[1:])


def count(env: Environment, args: list[LispValue]) -> int:
    _require(".count", args, 1, 1)
    return len(_as_seq(".count", args[0]))


# -------------------------------
# Predicates and symbols
# -------------------------------
def is_nil(env: Environment, args: list[LispValue]) -> bool:
    _require(".nil?", args, 1, 1)
    return args[0] is Nil


def symbol(env: Environment, args: list[LispValue]) -> Symbol:
    _require(".symbol", args, 1, 1)
    if not isinstance(args[0], str):
        raise KappaTypeError(".symbol expects a string")
    return Symbol(args[0])


def gensym(env: Environment, args: list[LispValue]) -> Symbol:
    _require(".gensym", args, 0, 1)
    prefix = args[0] if args else "G__"
    if not isinstance(prefix, str):
        raise KappaTypeError(".gensym prefix must be a string")
    return env.registry.gen_sym(prefix)


# -------------------------------
# Registration
# -------------------------------
def register(registry: VarRegistry, write: Callable[[str], None]) -> None:
    """Bind every primitive as a Var in `registry`; output goes through `write`."""
    procedures = {
        ".+": add,
        ".-": sub,
        ".*": mul,
        "./": div,
        ".=": equals,
        ".<": _comparison(".<", lambda a, b: a < b),
        ".>": _comparison(".>", lambda a, b: a > b),
        ".<=": _comparison(".<=", lambda a, b: a <= b),
        ".>=": _comparison(".>=", lambda a, b: a >= b),
        ".not": logical_not,
        ".print": make_print(write),
        ".println": make_print(write, newline=True),
        ".str": str_,
        ".list": list_builtin,
        ".vector": vector_builtin,
        ".cons": cons,
        ".first": first,
        ".rest": rest,
        ".count": count,
        ".nil?": is_nil,
        ".symbol": symbol,
        ".gensym": gensym,
    }
    for name, procedure in procedures.items():
        registry.define(Symbol(name), BuiltIn(name, procedure))
