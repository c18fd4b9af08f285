from synquote import EvaluatorFn, SExpression, LispValue
from synquote.errors import SynquoteSyntaxError
from synquote.evaluation.environment import Environment
from synquote.runtime_context import RuntimeContext
from synquote.types.symbol import Symbol


def let_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    """(let [name value ...] body...): each value is evaluated once, in order."""
    if not tail or not isinstance(tail[0], list):
        raise SynquoteSyntaxError("let requires a binding vector")
    bindings, body = tail[0], tail[1:]
    if len(bindings) % 2:
        raise SynquoteSyntaxError("let requires an even number of forms in the binding vector")

    local_env = Environment(outer=env)
    for name, value_expr in zip(bindings[::2], bindings[1::2]):
        if not isinstance(name, Symbol):
            raise SynquoteSyntaxError(f"let binding name must be a symbol, got {name!r}")
        if name.namespace is not None:
            raise SynquoteSyntaxError(f"Can't let qualified name: {name}")
        # Later bindings see earlier ones
        local_env.define(name, evaluate_fn(value_expr, local_env, runtime))

    result: LispValue = None
    for e in body:
        result = evaluate_fn(e, local_env, runtime)
    return result
