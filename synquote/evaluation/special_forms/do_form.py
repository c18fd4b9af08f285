from synquote import EvaluatorFn, SExpression, LispValue
from synquote.evaluation.environment import Environment
from synquote.runtime_context import RuntimeContext


def do_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    result: LispValue = None
    for e in tail:
        result = evaluate_fn(e, env, runtime)
    return result
