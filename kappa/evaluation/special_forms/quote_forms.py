from kappa import SExpression, LispValue, EvaluatorFn
from kappa.errors import KappaMalformedSpecialForm, KappaTypeError
from kappa.types.environment import Environment
from kappa.types.nil import Nil
from kappa.types.persistent_list import PersistentList, plist
from kappa.types.symbol import Symbol

QUOTE = Symbol("quote")
SYNTAX_QUOTE = Symbol("syntax-quote")
UNQUOTE = Symbol("unquote")
UNQUOTE_SPLICING = Symbol("unquote-splicing")


def _operand(form: PersistentList, name: str) -> SExpression:
    if len(form) != 2:
        raise KappaMalformedSpecialForm(f"{name} expects exactly 1 argument")
    return form[1]


def _is_call_of(item: SExpression, head: Symbol) -> bool:
    return isinstance(item, PersistentList) and not item.is_empty() and item.first == head


def eval_syntax_quote(
    evaluate_fn: EvaluatorFn,
    expr: SExpression,
    env: Environment,
    gensyms: dict[Symbol, Symbol],
    depth: int = 1,
) -> SExpression:
    """Build the data described by a syntax-quoted template.

    `~x` is evaluated and `~@x` spliced when they belong to this level
    (depth 1); deeper levels are rebuilt with their unquotes intact. Symbols
    ending in '#' are replaced by one fresh gensym per template.
    """

    def _process_items(seq) -> list:
        result_list = []
        for item in seq:
            if depth == 1 and _is_call_of(item, UNQUOTE_SPLICING):
                spliced = evaluate_fn(_operand(item, "unquote-splicing"), env)
                if spliced is Nil:
                    continue
                if not isinstance(spliced, (PersistentList, tuple)):
                    raise KappaTypeError("Unquote-splicing must produce a list or vector")
                result_list.extend(spliced)
                continue
            result_list.append(eval_syntax_quote(evaluate_fn, item, env, gensyms, depth))
        return result_list

    if isinstance(expr, Symbol):
        if expr.is_auto_gensym:
            sym = gensyms.get(expr)
            if sym is None:
                sym = gensyms[expr] = env.registry.gen_sym(expr.gensym_prefix())
            return sym
        return expr

    if isinstance(expr, tuple):
        return tuple(_process_items(expr))

    # Non-list atoms returned as-is
    if not isinstance(expr, PersistentList) or expr.is_empty():
        return expr

    head = expr.first
    if head == UNQUOTE:
        operand = _operand(expr, "unquote")
        if depth == 1:
            return evaluate_fn(operand, env)
        return plist(UNQUOTE, eval_syntax_quote(evaluate_fn, operand, env, gensyms, depth - 1))
    if head == UNQUOTE_SPLICING:
        operand = _operand(expr, "unquote-splicing")
        if depth == 1:
            raise KappaMalformedSpecialForm("unquote-splicing used outside of a list or vector")
        return plist(UNQUOTE_SPLICING, eval_syntax_quote(evaluate_fn, operand, env, gensyms, depth - 1))
    if head == SYNTAX_QUOTE:
        operand = _operand(expr, "syntax-quote")
        return plist(SYNTAX_QUOTE, eval_syntax_quote(evaluate_fn, operand, env, gensyms, depth + 1))

    return PersistentList.from_iterable(_process_items(expr))


def quote_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    if len(tail) != 1:
        raise KappaMalformedSpecialForm("quote expects exactly 1 argument")
    return tail[0]


def syntax_quote_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    if len(tail) != 1:
        raise KappaMalformedSpecialForm("syntax-quote expects exactly 1 argument")
    # Returns the constructed data; the result is not evaluated here.
    return eval_syntax_quote(evaluate_fn, tail[0], env, {})


def unquote_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    raise KappaMalformedSpecialForm("unquote not valid outside of syntax-quote")


def unquote_splicing_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    raise KappaMalformedSpecialForm("unquote-splicing not valid outside of syntax-quote")
