from synquote import EvaluatorFn, SExpression, LispValue
from synquote.errors import SynquoteSyntaxError
from synquote.evaluation.environment import Environment
from synquote.runtime_context import RuntimeContext
from synquote.types.symbol import Symbol


def _name(value: LispValue, who: str) -> str:
    if isinstance(value, Symbol) and value.namespace is None:
        return value.id
    if isinstance(value, str) and value:
        return value
    raise SynquoteSyntaxError(f"{who} expects a namespace name, got {value!r}")


def in_ns_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    """(in-ns 'name): switch the current namespace, creating it if needed."""
    if len(tail) != 1:
        raise SynquoteSyntaxError("in-ns expects exactly 1 argument")
    name = _name(evaluate_fn(tail[0], env, runtime), "in-ns")
    runtime.in_ns(name)
    return Symbol(name)


def alias_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    """(alias 'short 'full.name): add an alias to the current namespace."""
    if len(tail) != 2:
        raise SynquoteSyntaxError("alias expects exactly 2 arguments")
    short = _name(evaluate_fn(tail[0], env, runtime), "alias")
    full = _name(evaluate_fn(tail[1], env, runtime), "alias")
    runtime.namespace.add_alias(short, full)
    return None
