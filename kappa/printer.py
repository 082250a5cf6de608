"""Render Kappa values as source text.

`readable=True` produces text the reader could read back (strings quoted and
escaped); `readable=False` is what `.print` shows.
"""

from __future__ import annotations

from io import StringIO

from kappa import LispValue
from kappa.types.builtin import BuiltIn
from kappa.types.function import Closure
from kappa.types.nil import NilType
from kappa.types.persistent_list import PersistentList
from kappa.types.symbol import Symbol

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


def _write(value: LispValue, buffer: StringIO, readable: bool) -> None:
    if isinstance(value, NilType):
        buffer.write("nil")
    elif isinstance(value, bool):
        buffer.write("true" if value else "false")
    elif isinstance(value, str):
        if readable:
            buffer.write('"')
            buffer.write("".join(_ESCAPES.get(c, c) for c in value))
            buffer.write('"')
        else:
            buffer.write(value)
    elif isinstance(value, PersistentList):
        _write_seq(value, "(", ")", buffer, readable)
    elif isinstance(value, tuple):
        _write_seq(value, "[", "]", buffer, readable)
    elif isinstance(value, (Symbol, BuiltIn, Closure)):
        buffer.write(str(value))
    else:
        buffer.write(repr(value))


def _write_seq(items, open_: str, close: str, buffer: StringIO, readable: bool) -> None:
    buffer.write(open_)
    first = True
    for item in items:
        if not first:
            buffer.write(" ")
        _write(item, buffer, readable)
        first = False
    buffer.write(close)


def to_lisp_string(value: LispValue, readable: bool = True) -> str:
    with StringIO() as buffer:
        _write(value, buffer, readable)
        return buffer.getvalue()
