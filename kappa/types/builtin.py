from __future__ import annotations

from typing import Callable

from kappa import LispValue


class BuiltIn:
    """A native procedure exposed to Lisp code.

    `procedure` is called as procedure(env, args) with already-evaluated args.
    """

    __slots__ = ("name", "procedure")

    def __init__(self, name: str, procedure: Callable[..., LispValue]):
        self.name = name
        self.procedure = procedure

    def __call__(self, env, args: list[LispValue]) -> LispValue:
        return self.procedure(env, args)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<BuiltIn {self.name}>"
