"""Registry of special forms for the Kappa evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table before ordinary function application, so a
special form name cannot be shadowed by a local or a Var in operator position.
"""

from kappa.types.symbol import Symbol
from kappa.evaluation.special_forms.def_form import def_form
from kappa.evaluation.special_forms.fn_form import fn_form
from kappa.evaluation.special_forms.let_form import let_form
from kappa.evaluation.special_forms.if_form import if_form
from kappa.evaluation.special_forms.do_form import do_form
from kappa.evaluation.special_forms.defmacro_form import defmacro_form
from kappa.evaluation.special_forms.quote_forms import quote_form, syntax_quote_form, unquote_form, unquote_splicing_form
from kappa.evaluation.special_forms.apply_form import apply_form
from kappa.evaluation.special_forms.eval_form import eval_form
from kappa.evaluation.special_forms.macroexpand_forms import macroexpand1_form, macroexpand_form

SPECIAL_FORMS = {
    Symbol("def"): def_form,
    Symbol("fn"): fn_form,
    Symbol("let"): let_form,
    Symbol("if"): if_form,
    Symbol("do"): do_form,
    Symbol("defmacro"): defmacro_form,
    Symbol("quote"): quote_form,
    Symbol("syntax-quote"): syntax_quote_form,
    Symbol("unquote"): unquote_form,
    Symbol("unquote-splicing"): unquote_splicing_form,
    Symbol("apply"): apply_form,
    Symbol("eval"): eval_form,
    Symbol("macroexpand-1"): macroexpand1_form,
    Symbol("macroexpand"): macroexpand_form,
}
