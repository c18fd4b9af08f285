"""Special forms: try and throw.

(try body... (catch name handler...) (finally cleanup...))

Any exception raised by the body is bound to `name` while the handler runs;
the value of the last handler form is the value of the try. Without a catch
clause the exception propagates after the finally clause has run.
"""

from synquote import EvaluatorFn, SExpression, LispValue
from synquote.errors import SynquoteSyntaxError, SynquoteThrow
from synquote.evaluation.environment import Environment
from synquote.runtime_context import RuntimeContext
from synquote.types.symbol import Symbol

CATCH = Symbol("catch")
FINALLY = Symbol("finally")


def _clause(expr: SExpression, kind: Symbol) -> bool:
    return isinstance(expr, list) and bool(expr) and expr[0] == kind


def try_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    body = [e for e in tail if not (_clause(e, CATCH) or _clause(e, FINALLY))]
    catches = [e for e in tail if _clause(e, CATCH)]
    finallies = [e for e in tail if _clause(e, FINALLY)]
    if len(catches) > 1 or len(finallies) > 1:
        raise SynquoteSyntaxError("try accepts at most one catch and one finally clause")

    handler = catches[0] if catches else None
    if handler is not None:
        if len(handler) < 2 or not isinstance(handler[1], Symbol):
            raise SynquoteSyntaxError("catch requires a binding name: (catch name body...)")
        if handler[1].namespace is not None:
            raise SynquoteSyntaxError(f"Can't bind qualified name: {handler[1]}")

    try:
        result: LispValue = None
        for e in body:
            result = evaluate_fn(e, env, runtime)
        return result
    except Exception as ex:
        if handler is None:
            raise
        local_env = Environment(outer=env)
        local_env.define(handler[1], ex.value if isinstance(ex, SynquoteThrow) else ex)
        result = None
        for e in handler[2:]:
            result = evaluate_fn(e, local_env, runtime)
        return result
    finally:
        if finallies:
            for e in finallies[0][1:]:
                evaluate_fn(e, env, runtime)


def throw_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    if len(tail) != 1:
        raise SynquoteSyntaxError("throw expects exactly 1 argument")
    value = evaluate_fn(tail[0], env, runtime)
    if isinstance(value, Exception):
        raise value
    raise SynquoteThrow(value)
