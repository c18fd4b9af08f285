"""Reference host evaluator.

Just enough evaluation to run expanded code: special-form dispatch, symbol
lookup and application of Python callables. Macro calls are fully expanded
before evaluation; a head-position macro that only became defined while
evaluating (e.g. inside a `do`) is expanded when it is reached.
"""

from __future__ import annotations

from synquote import SExpression, LispValue
from synquote.config import CORE_NAMESPACE
from synquote.errors import SynquoteTypeError
from synquote.evaluation.environment import Environment
from synquote.evaluation.special_forms import SPECIAL_FORMS, UNEXPANDED_FORMS
from synquote.runtime_context import RuntimeContext
from synquote.types.symbol import Symbol


def special_form_name(head: SExpression) -> Symbol | None:
    """The special form named by `head`, accepting core-qualified spellings."""
    if not isinstance(head, Symbol):
        return None
    if head.namespace is not None:
        if head.namespace != CORE_NAMESPACE:
            return None
        head = Symbol(head.id)
    return head if head in SPECIAL_FORMS else None


def evaluate(expr: SExpression, env: Environment, runtime: RuntimeContext) -> LispValue:
    """Expand `expr` completely, then evaluate it."""
    if not (isinstance(expr, list) and expr and special_form_name(expr[0]) in UNEXPANDED_FORMS):
        expr = runtime.expander.expand_all(expr, runtime.namespace)
    return evaluate0(expr, env, runtime)


def evaluate0(expr: SExpression, env: Environment, runtime: RuntimeContext) -> LispValue:
    if isinstance(expr, Symbol):
        return env.lookup(expr, runtime.namespace)

    # --- Atoms return as-is ---
    if not isinstance(expr, list):
        return expr
    if not expr:
        return []

    head, *tail_args = expr

    special = special_form_name(head)
    if special is not None:
        return SPECIAL_FORMS[special](tail_args, env, runtime, evaluate0)

    if runtime.expander.macro_for(expr, runtime.namespace) is not None:
        return evaluate(expr, env, runtime)

    fn = evaluate0(head, env, runtime)
    if not callable(fn):
        raise SynquoteTypeError(f"{fn!r} is not callable")
    args = [evaluate0(arg, env, runtime) for arg in tail_args]
    return fn(env, args)
