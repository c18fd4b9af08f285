from synquote import EvaluatorFn, SExpression, LispValue
from synquote.errors import SynquoteSyntaxError
from synquote.evaluation.environment import Environment
from synquote.runtime_context import RuntimeContext


def if_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    if len(tail) not in (2, 3):
        raise SynquoteSyntaxError("if requires a condition, a then-expression and an optional else")

    cond = evaluate_fn(tail[0], env, runtime)
    # Only nil and false are false
    if cond is not None and cond is not False:
        return evaluate_fn(tail[1], env, runtime)
    if len(tail) > 2:
        return evaluate_fn(tail[2], env, runtime)
    return None
