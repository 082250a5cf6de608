"""
  Kappa Reader, Lexer and Parser

- Streaming, lazy parsing
- Emits Kappa values directly:

    - nil -> Nil
    - true / false -> True / False
    - (a b c) -> PersistentList
    - [a b c] -> tuple
    - symbols -> Symbol
    - strings -> str
    - numbers -> int / float
    - 'x -> (quote x), `x -> (syntax-quote x), ~x -> (unquote x), ~@x -> (unquote-splicing x)

Commas are whitespace, ';' starts a comment running to end of line.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from kappa import SExpression
from kappa.errors import KappaSyntaxError
from kappa.types.nil import Nil
from kappa.types.persistent_list import PersistentList, plist
from kappa.types.symbol import Symbol


TOKEN_RE = re.compile(
    r"[\s,]*(?:"
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<quote>['`])"  # ' and `
    r"|(?P<unquote>~@|~)"  # ~ and ~@
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbracket>\[)"  # [
    r"|(?P<rbracket>\])"  # ]
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<symbol>[^\s,()\[\]\'`~";]+)'  # fallback: symbols and numbers
    r")",
    re.DOTALL,
)

INT_RE = re.compile(r"[+-]?\d+")
FLOAT_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")
STRING_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
TRAILING_RE = re.compile(r"[\s,]*\Z")

NAMED_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}

QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("syntax-quote"),
    "~": Symbol("unquote"),
    "~@": Symbol("unquote-splicing"),
}

LITERALS: dict[str, SExpression] = {
    "nil": Nil,
    "true": True,
    "false": False,
}

CLOSERS = {"rparen": ")", "rbracket": "]"}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            if TRAILING_RE.match(source, pos):
                break
            raise KappaSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
        pos = m.end()
        kind = m.lastgroup
        if kind == "comment":
            continue
        yield kind, m.group(kind)


def _unescape(body: str) -> str:
    def _sub(m: re.Match) -> str:
        c = m.group(1)
        if c not in NAMED_ESCAPES:
            raise KappaSyntaxError(f"Unsupported escape character: \\{c}")
        return NAMED_ESCAPES[c]

    return STRING_ESCAPE_RE.sub(_sub, body)


def parse_atom(tok_val: str) -> SExpression:
    if tok_val in LITERALS:
        return LITERALS[tok_val]
    if INT_RE.fullmatch(tok_val):
        return int(tok_val)
    if FLOAT_RE.fullmatch(tok_val):
        return float(tok_val)
    return Symbol(tok_val)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def _parse_seq(self, closer: str) -> list[SExpression]:
        items = []
        while True:
            tok_type, tok_val = self.peek()
            if tok_type is None:
                raise KappaSyntaxError(f"EOF while reading, expected '{CLOSERS[closer]}'")
            if tok_type == closer:
                self.advance()
                return items
            if tok_type in CLOSERS:
                raise KappaSyntaxError(f"Unmatched delimiter: {tok_val}")
            items.append(self.parse_expr())

    def parse_expr(self) -> SExpression:
        """Parse one form; returns None when the stream is exhausted."""
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None

        if tok_type == "symbol":
            self.advance()
            return parse_atom(tok_val)

        # Quote forms
        if tok_type in ("quote", "unquote"):
            self.advance()
            if self.peek()[0] is None:
                raise KappaSyntaxError(f"EOF after {tok_val}")
            expr = self.parse_expr()
            return plist(QUOTE_FORMS[tok_val], expr)

        if tok_type == "lparen":
            self.advance()
            return PersistentList.from_iterable(self._parse_seq("rparen"))

        if tok_type == "lbracket":
            self.advance()
            return tuple(self._parse_seq("rbracket"))

        if tok_type == "string":
            self.advance()
            return _unescape(tok_val[1:-1])

        if tok_type in CLOSERS:
            raise KappaSyntaxError(f"Unmatched delimiter: {tok_val}")

        raise KappaSyntaxError(f"Unknown token: {tok_type} {tok_val}")

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read(source: str) -> list[SExpression]:
    """Read every form in `source`."""
    return list(TokenStream(lex(source)).parse_all())
