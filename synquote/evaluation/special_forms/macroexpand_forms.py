"""Special forms that expose the macro expander to source code.

macroexpand-1: expand a single step at the head position if it is a macro.
macroexpand:   fully expand a form (except inside quote/syntax-quote).

The argument is evaluated, so the usual call is (macroexpand-1 '(m ...)).
Both return the expansion as data and do not evaluate it.
"""

from synquote import EvaluatorFn, SExpression
from synquote.errors import SynquoteSyntaxError
from synquote.evaluation.environment import Environment
from synquote.runtime_context import RuntimeContext


def macroexpand1_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
):
    if len(tail) != 1:
        raise SynquoteSyntaxError("macroexpand-1 expects exactly 1 argument")
    form = evaluate_fn(tail[0], env, runtime)
    return runtime.expander.macroexpand_1(form, runtime.namespace)


def macroexpand_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
):
    if len(tail) != 1:
        raise SynquoteSyntaxError("macroexpand expects exactly 1 argument")
    form = evaluate_fn(tail[0], env, runtime)
    return runtime.expander.macroexpand_all(form, runtime.namespace)
