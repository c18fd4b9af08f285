"""Syntax-quote template construction.

`build_template` walks a template and produces a finished tree:

- bare symbols are qualified with the template's defining namespace;
- auto-gensym symbols (`x#`) are renamed once per expansion;
- `(unquote e)` inserts the single node `e` resolves to;
- `(unquote-splicing e)` inserts each element of the sequence `e` resolves to;
- a nested `(syntax-quote ...)` raises the depth, and escapes at depth > 1
  are rebuilt (with their argument processed one level down) instead of
  being resolved.

The resolver for unquoted expressions is passed in as `evaluate_fn`, so the
same builder serves macro expansion and run-time syntax-quote in a host.
"""

from __future__ import annotations

from typing import Iterable

from synquote import Node, EvaluatorFn
from synquote.config import GENSYM_SUFFIX
from synquote.errors import (
    MalformedSplice,
    SynquoteSyntaxError,
    UnsupportedNestedTemplate,
)
from synquote.types.expansion_context import ExpansionContext
from synquote.types.symbol import Symbol

QUOTE = Symbol("quote")
SYNTAX_QUOTE = Symbol("syntax-quote")
UNQUOTE = Symbol("unquote")
UNQUOTE_SPLICING = Symbol("unquote-splicing")

# Special-form and lambda-list names are never namespace-qualified
UNQUALIFIED_NAMES = frozenset(
    {
        "quote",
        "syntax-quote",
        "unquote",
        "unquote-splicing",
        "do",
        "if",
        "try",
        "catch",
        "finally",
        "throw",
        "def",
        "defmacro",
        "&",
    }
)


class Splice:
    """Nodes waiting to be flattened into the enclosing list."""

    __slots__ = ("elements",)

    def __init__(self, elements: Iterable[Node]):
        self.elements: list[Node] = list(elements)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Splice) and self.elements == other.elements

    def __repr__(self):
        return f"Splice({self.elements!r})"


def qualify_symbol(sym: Symbol, ctx: ExpansionContext) -> Symbol:
    if sym.is_auto_gensym:
        renamed = ctx.rename_table.get(sym.id)
        if renamed is None:
            renamed = Symbol(ctx.allocator.next(f"{sym.strip_marker()}__") + GENSYM_SUFFIX)
            ctx.rename_table[sym.id] = renamed
        return renamed
    if sym.namespace is None and sym.id in UNQUALIFIED_NAMES:
        return sym
    return ctx.namespace.resolve(sym)


def _escape_argument(form: list, ctx: ExpansionContext) -> Node:
    if len(form) != 2:
        raise SynquoteSyntaxError(
            f"{form[0]} expects exactly 1 argument, got {len(form) - 1}"
        )
    return form[1]


def build_template(
    form: Node,
    ctx: ExpansionContext,
    evaluate_fn: EvaluatorFn,
    depth: int = 1,
) -> Node | Splice:
    if isinstance(form, Symbol):
        return qualify_symbol(form, ctx)
    # Literals are opaque
    if not isinstance(form, list):
        return form
    if not form:
        return []

    head = form[0]

    if head == UNQUOTE or head == UNQUOTE_SPLICING:
        arg = _escape_argument(form, ctx)
        if depth > 1:
            return [head, build_template(arg, ctx, evaluate_fn, depth - 1)]
        value = evaluate_fn(arg, ctx)
        if head == UNQUOTE:
            # A single child, whatever its shape
            return list(value.elements) if isinstance(value, Splice) else value
        if isinstance(value, Splice):
            return value
        # nil splices as the empty sequence
        if value is None:
            return Splice([])
        if isinstance(value, (list, tuple)):
            return Splice(value)
        raise MalformedSplice(form, value, ctx.macro_name)

    if head == SYNTAX_QUOTE:
        arg = _escape_argument(form, ctx)
        if depth + 1 > ctx.max_nesting:
            raise UnsupportedNestedTemplate(depth + 1, ctx.macro_name, form)
        return [head, build_template(arg, ctx, evaluate_fn, depth + 1)]

    result: list[Node] = []
    for item in form:
        built = build_template(item, ctx, evaluate_fn, depth)
        if isinstance(built, Splice):
            result.extend(built.elements)
        else:
            result.append(built)
    return result
