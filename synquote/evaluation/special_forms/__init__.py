"""Registry of special forms for the reference host evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table to dispatch special forms before ordinary
function application.
"""

from synquote.types.symbol import Symbol
from synquote.evaluation.special_forms.quote_forms import (
    quote_form,
    syntax_quote_form,
    unquote_form,
    unquote_splice_form,
)
from synquote.evaluation.special_forms.do_form import do_form
from synquote.evaluation.special_forms.let_form import let_form
from synquote.evaluation.special_forms.if_form import if_form
from synquote.evaluation.special_forms.try_form import try_form, throw_form
from synquote.evaluation.special_forms.def_form import def_form
from synquote.evaluation.special_forms.defmacro_form import defmacro_form
from synquote.evaluation.special_forms.macroexpand_forms import macroexpand1_form, macroexpand_form
from synquote.evaluation.special_forms.ns_forms import in_ns_form, alias_form

SPECIAL_FORMS = {
    Symbol("quote"): quote_form,
    Symbol("syntax-quote"): syntax_quote_form,
    Symbol("unquote"): unquote_form,
    Symbol("unquote-splicing"): unquote_splice_form,
    Symbol("do"): do_form,
    Symbol("let"): let_form,
    Symbol("if"): if_form,
    Symbol("try"): try_form,
    Symbol("throw"): throw_form,
    Symbol("def"): def_form,
    Symbol("defmacro"): defmacro_form,
    Symbol("macroexpand-1"): macroexpand1_form,
    Symbol("macroexpand"): macroexpand_form,
    Symbol("in-ns"): in_ns_form,
    Symbol("alias"): alias_form,
}

# Forms whose arguments must reach the handler without prior macro expansion
UNEXPANDED_FORMS = frozenset({Symbol("defmacro"), Symbol("quote"), Symbol("syntax-quote")})

# Special forms a namespace refers from the core namespace; the remaining ones
# are never qualified by templates
REFERRED_SPECIAL_FORMS = ("let", "macroexpand-1", "macroexpand", "in-ns", "alias")
