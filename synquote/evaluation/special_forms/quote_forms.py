from synquote import EvaluatorFn, SExpression, LispValue
from synquote.errors import SynquoteSyntaxError
from synquote.evaluation.environment import Environment
from synquote.runtime_context import RuntimeContext
from synquote.template.builder import Splice, build_template
from synquote.types.expansion_context import ExpansionContext


def quote_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    if len(tail) != 1:
        raise SynquoteSyntaxError("quote expects exactly 1 argument")
    return tail[0]


def syntax_quote_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    """Build a template at run time; unquoted expressions are evaluated in `env`."""
    if len(tail) != 1:
        raise SynquoteSyntaxError("syntax-quote expects exactly 1 argument")
    ctx = ExpansionContext(
        namespace=runtime.namespace,
        allocator=runtime.expander.allocator,
        max_nesting=runtime.expander.max_nesting,
    )
    result = build_template(tail[0], ctx, lambda e, _ctx: evaluate_fn(e, env, runtime))
    if isinstance(result, Splice):
        return result.elements
    return result


def unquote_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    raise SynquoteSyntaxError("unquote not valid outside of syntax-quote")


def unquote_splice_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    raise SynquoteSyntaxError("unquote-splicing not valid outside of syntax-quote")
