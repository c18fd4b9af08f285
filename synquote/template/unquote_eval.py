"""Macro-time resolution of unquoted expressions.

While a macro body is being materialized, the expressions behind `~` and
`~@` (and the body itself) are resolved by a deliberately small evaluator:

- a bare symbol names a macro parameter and yields the *unevaluated* argument
  node supplied at the call site;
- `(quote x)` yields `x`;
- `(syntax-quote x)` builds the template `x`;
- `(helper arg ...)` calls a macro-time helper on the resolved arguments;
- anything else is a literal and yields itself.

Helpers take `(ctx, args)` and return a node. Hosts add their own with
`register_helper`.
"""

from __future__ import annotations

from typing import Callable

from synquote import Node
from synquote.errors import SynquoteNameError, SynquoteSyntaxError, SynquoteTypeError
from synquote.template.builder import (
    QUOTE,
    SYNTAX_QUOTE,
    UNQUOTE,
    UNQUOTE_SPLICING,
    Splice,
    build_template,
)
from synquote.types.expansion_context import ExpansionContext
from synquote.types.keyword import Keyword
from synquote.types.symbol import Symbol

HelperFn = Callable[[ExpansionContext, list[Node]], Node]

MACRO_HELPERS: dict[str, HelperFn] = {}


def register_helper(name: str, table: dict[str, HelperFn] | None = None):
    """Decorator registering a macro-time helper under `name`."""
    target = MACRO_HELPERS if table is None else table

    def decorator(fn: HelperFn) -> HelperFn:
        target[name] = fn
        return fn

    return decorator


def resolve_unquote(expr: Node, ctx: ExpansionContext) -> Node | Splice:
    if isinstance(expr, Symbol):
        if expr.namespace is None and expr.id in ctx.bindings:
            return ctx.bindings[expr.id]
        where = f" in macro {ctx.macro_name}" if ctx.macro_name else ""
        raise SynquoteNameError(f"Unable to resolve {expr}{where}")

    if not isinstance(expr, list):
        return expr
    if not expr:
        return []

    head, *args = expr
    if head == QUOTE or head == SYNTAX_QUOTE:
        if len(args) != 1:
            raise SynquoteSyntaxError(f"{head} expects exactly 1 argument")
        if head == QUOTE:
            return args[0]
        return build_template(args[0], ctx, resolve_unquote)
    if head == UNQUOTE or head == UNQUOTE_SPLICING:
        raise SynquoteSyntaxError(f"{head} not valid outside of syntax-quote")

    helpers = ctx.helpers if ctx.helpers is not None else MACRO_HELPERS
    if isinstance(head, Symbol) and head.namespace is None and head.id in helpers:
        values = [_single(resolve_unquote(a, ctx)) for a in args]
        return helpers[head.id](ctx, values)
    raise SynquoteNameError(f"{head} is not a macro-time function")


def _single(value: Node | Splice) -> Node:
    return list(value.elements) if isinstance(value, Splice) else value


# -------------------------------
# Built-in helpers
# -------------------------------
def _seq(value: Node, who: str) -> list[Node]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    raise SynquoteTypeError(f"{who} expects a sequence, got {value!r}")


def _int(value: Node, who: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SynquoteTypeError(f"{who} expects an integer, got {value!r}")
    return value


@register_helper("list")
def _list(ctx: ExpansionContext, args: list[Node]) -> Node:
    return list(args)


@register_helper("vec")
def _vec(ctx: ExpansionContext, args: list[Node]) -> Node:
    if len(args) != 1:
        raise SynquoteTypeError("vec expects exactly 1 argument")
    return _seq(args[0], "vec")


@register_helper("concat")
def _concat(ctx: ExpansionContext, args: list[Node]) -> Node:
    out: list[Node] = []
    for a in args:
        out.extend(_seq(a, "concat"))
    return out


@register_helper("cons")
def _cons(ctx: ExpansionContext, args: list[Node]) -> Node:
    if len(args) != 2:
        raise SynquoteTypeError("cons expects exactly 2 arguments")
    return [args[0], *_seq(args[1], "cons")]


@register_helper("first")
def _first(ctx: ExpansionContext, args: list[Node]) -> Node:
    seq = _seq(args[0] if args else None, "first")
    return seq[0] if seq else None


@register_helper("rest")
def _rest(ctx: ExpansionContext, args: list[Node]) -> Node:
    return _seq(args[0] if args else None, "rest")[1:]


@register_helper("count")
def _count(ctx: ExpansionContext, args: list[Node]) -> Node:
    if len(args) != 1:
        raise SynquoteTypeError("count expects exactly 1 argument")
    return len(_seq(args[0], "count"))


@register_helper("range")
def _range(ctx: ExpansionContext, args: list[Node]) -> Node:
    if not 1 <= len(args) <= 3:
        raise SynquoteTypeError("range expects 1 to 3 arguments")
    return list(range(*(_int(a, "range") for a in args)))


@register_helper("inc")
def _inc(ctx: ExpansionContext, args: list[Node]) -> Node:
    return _int(args[0], "inc") + 1


@register_helper("dec")
def _dec(ctx: ExpansionContext, args: list[Node]) -> Node:
    return _int(args[0], "dec") - 1


def _as_text(value: Node) -> str:
    if value is None:
        return ""
    if isinstance(value, (Symbol, Keyword, str)):
        return str(value)
    from synquote.debug_utils.pprint import to_source
    return to_source(value)


@register_helper("str")
def _str(ctx: ExpansionContext, args: list[Node]) -> Node:
    return "".join(_as_text(a) for a in args)


@register_helper("symbol")
def _symbol(ctx: ExpansionContext, args: list[Node]) -> Node:
    if len(args) == 1:
        return Symbol.parse(_as_text(args[0]))
    if len(args) == 2:
        return Symbol(_as_text(args[1]), _as_text(args[0]) or None)
    raise SynquoteTypeError("symbol expects 1 or 2 arguments")


@register_helper("keyword")
def _keyword(ctx: ExpansionContext, args: list[Node]) -> Node:
    if len(args) != 1:
        raise SynquoteTypeError("keyword expects exactly 1 argument")
    return Keyword(_as_text(args[0]).lstrip(":"))


@register_helper("gensym")
def _gensym(ctx: ExpansionContext, args: list[Node]) -> Node:
    if len(args) > 1:
        raise SynquoteTypeError("gensym takes at most 1 argument: (gensym [prefix])")
    prefix = _as_text(args[0]) if args else "G__"
    return ctx.allocator.gen_sym(prefix)
