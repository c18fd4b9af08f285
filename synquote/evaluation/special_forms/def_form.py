from synquote import EvaluatorFn, SExpression, LispValue
from synquote.errors import SynquoteSyntaxError
from synquote.evaluation.environment import Environment
from synquote.runtime_context import RuntimeContext
from synquote.types.symbol import Symbol


def def_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    """(def name value): bind a global in the current namespace and return its symbol."""
    if len(tail) not in (1, 2):
        raise SynquoteSyntaxError("def requires a name and an optional value")
    name = tail[0]
    if not isinstance(name, Symbol):
        raise SynquoteSyntaxError(f"def name must be a symbol, got {name!r}")
    ns = runtime.namespace
    if name.namespace not in (None, ns.name):
        raise SynquoteSyntaxError(f"Can't create defs outside of current ns: {name}")
    # A local definition shadows a referred name
    ns.refers.pop(name.id, None)
    qualified = Symbol(name.id, ns.name)
    value = evaluate_fn(tail[1], env, runtime) if len(tail) == 2 else None
    env.define_global(qualified, value)
    return qualified
