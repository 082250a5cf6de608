"""Kappa: a small Clojure-flavoured Lisp.

Code and data share one representation. Python types are used where they
already fit (int, float, bool, str, and tuple for `[...]` vectors); Kappa adds
Symbol, Nil, PersistentList for `(...)` lists, Function, Macro and BuiltIn.
"""

from typing import Any, Callable

__version__ = "0.1.0"

# A runtime value produced by evaluation.
LispValue = Any
# A form as read from source; the same objects as values.
SExpression = LispValue

# Signature shared by special-form handlers and the macro expander: (form, env) -> value
EvaluatorFn = Callable[..., LispValue]
