"""Special form: defmacro.

(defmacro name [fixed ... & rest] body)
(defmacro name "docstring" [fixed ... & rest] body)

Registers the macro in the runtime's registry with the current namespace as
its defining namespace. The body is kept unevaluated; it is materialized on
every expansion.
"""

from __future__ import annotations

from synquote import EvaluatorFn, SExpression, LispValue
from synquote.errors import SynquoteSyntaxError
from synquote.evaluation.environment import Environment
from synquote.runtime_context import RuntimeContext
from synquote.types.symbol import Symbol

AMPERSAND = Symbol("&")


def parse_params(params: SExpression) -> tuple[list[str], str | None]:
    """Split a parameter vector into fixed names and the optional variadic name."""
    if not isinstance(params, list):
        raise SynquoteSyntaxError("Macro parameter list must be a vector")
    fixed: list[str] = []
    variadic: str | None = None
    items = list(params)
    while items:
        p = items.pop(0)
        if p == AMPERSAND:
            if len(items) != 1:
                raise SynquoteSyntaxError("& must be followed by exactly one parameter name")
            p = items.pop(0)
            if not isinstance(p, Symbol) or p.namespace is not None or p == AMPERSAND:
                raise SynquoteSyntaxError(f"Invalid variadic parameter: {p!r}")
            variadic = p.id
            break
        if not isinstance(p, Symbol) or p.namespace is not None:
            raise SynquoteSyntaxError(f"Macro parameter must be an unqualified symbol, got {p!r}")
        fixed.append(p.id)
    names = fixed + ([variadic] if variadic is not None else [])
    if len(set(names)) != len(names):
        raise SynquoteSyntaxError(f"Duplicate macro parameter in {names}")
    return fixed, variadic


def defmacro_form(
    tail: list[SExpression], env: Environment, runtime: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    """Register a macro named by the first argument with params/body in tail."""
    if len(tail) < 3:
        raise SynquoteSyntaxError("defmacro requires a name, a parameter vector and a body")

    macro_name = tail[0]
    if not isinstance(macro_name, Symbol):
        raise SynquoteSyntaxError(f"Macro name must be a Symbol, got {macro_name!r}")

    rest = tail[1:]
    if isinstance(rest[0], str):
        # docstring
        rest = rest[1:]
    if len(rest) != 2:
        raise SynquoteSyntaxError("defmacro body must be exactly one form")

    fixed, variadic = parse_params(rest[0])
    # A local macro shadows a referred name
    runtime.namespace.refers.pop(macro_name.id, None)
    runtime.registry.define(macro_name.id, fixed, variadic, rest[1], runtime.namespace.name)
    return Symbol(macro_name.id, runtime.namespace.name)
