from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    UNBOUND_SYMBOL = "unbound-symbol"
    ARITY_MISMATCH = "arity-mismatch"
    NOT_INVOCABLE = "not-invocable"
    MALFORMED_SPECIAL_FORM = "malformed-special-form"
    INVALID_SYMBOL = "invalid-symbol"
    SYNTAX = "syntax"
    NATIVE = "native"


class KappaError(Exception):
    """ Base class for all Kappa errors"""
    kind: ErrorKind = ErrorKind.NATIVE


class KappaInvalidSymbol(KappaError):
    """ Raised when something other than a symbol is used as a binding name"""
    kind = ErrorKind.INVALID_SYMBOL


class KappaUnboundSymbol(KappaError):
    """ Raised when a symbol resolves in neither the lexical chain nor the Var registry"""
    kind = ErrorKind.UNBOUND_SYMBOL


class KappaArityMismatch(KappaError):
    """ Raised when no arity body accepts the supplied number of arguments"""
    kind = ErrorKind.ARITY_MISMATCH


class KappaNotInvocable(KappaError):
    """ Raised when the operator position evaluates to something that cannot be called"""
    kind = ErrorKind.NOT_INVOCABLE


class KappaMalformedSpecialForm(KappaError):
    """ Raised when a special form does not have the shape it requires"""
    kind = ErrorKind.MALFORMED_SPECIAL_FORM


class KappaSyntaxError(KappaError):
    """ Raised by the reader on malformed source text"""
    kind = ErrorKind.SYNTAX


class KappaTypeError(KappaError):
    """ Raised by built-ins when argument types are incorrect"""
    kind = ErrorKind.NATIVE


def error_kind(exc: BaseException) -> ErrorKind:
    """Classify any exception raised out of evaluation."""
    if isinstance(exc, KappaError):
        return exc.kind
    return ErrorKind.NATIVE
