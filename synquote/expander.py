"""Macro expansion: one rewrite step and full fixpoint rewriting.

expand_1:   rewrite a single call whose head names a registered macro.
expand_all: expand the outermost call to a fixpoint, then recurse into the
            children of the result, bounded by a maximum expansion depth.

Both raise ExpansionError subclasses; try_expand_1 / try_expand_all return the
same failures as ExpansionResult values instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from synquote import Node
from synquote.config import CORE_NAMESPACE, get_max_expansion_depth, get_max_template_nesting
from synquote.errors import ArityMismatch, ExpansionDepthExceeded, ExpansionError, UnknownMacro
from synquote.gensym import GENSYM, GensymAllocator
from synquote.template.builder import QUOTE, SYNTAX_QUOTE, Splice
from synquote.template.unquote_eval import MACRO_HELPERS, resolve_unquote
from synquote.types.expansion_context import ExpansionContext
from synquote.types.macro_def import MacroDef
from synquote.types.macro_registry import MacroRegistry
from synquote.types.namespace import Namespace
from synquote.types.symbol import Symbol

logger = logging.getLogger(__name__)

# Head of the implicit sequencing form wrapped around a top-level splice
DO = Symbol("do")

# Forms whose arguments are not all calls
LET = Symbol("let")
TRY = Symbol("try")
CATCH = Symbol("catch")
FINALLY = Symbol("finally")


def names_form(head: Node, form: Symbol) -> bool:
    """True when `head` spells `form`, bare or qualified with the core namespace."""
    return (
        isinstance(head, Symbol)
        and head.id == form.id
        and head.namespace in (None, CORE_NAMESPACE)
    )


@dataclass(frozen=True)
class ExpansionResult:
    node: Node = None
    error: ExpansionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Expander:
    def __init__(
        self,
        registry: MacroRegistry,
        allocator: GensymAllocator | None = None,
        max_depth: int | None = None,
        helpers: dict[str, Callable] | None = None,
        max_nesting: int | None = None,
        namespaces: dict[str, Namespace] | None = None,
    ):
        self.registry = registry
        self.allocator = allocator if allocator is not None else GENSYM
        self.max_depth = max_depth if max_depth is not None else get_max_expansion_depth()
        self.max_nesting = max_nesting if max_nesting is not None else get_max_template_nesting()
        self.helpers = {**MACRO_HELPERS, **(helpers or {})}
        # Known namespaces, so a macro's aliases and refers apply to its template
        self.namespaces = namespaces if namespaces is not None else {}

    def _caller_namespace(self, namespace: Namespace | str | None) -> Namespace | None:
        if isinstance(namespace, str):
            ns = self.namespaces.get(namespace)
            return ns if ns is not None else Namespace(namespace)
        return namespace

    def macro_for(self, form: Node, namespace: Namespace | str | None = None) -> MacroDef | None:
        """The macro named by the head of `form`, if any.

        A bare head resolves through `namespace`, the namespace of the code
        being expanded; without one the newest macro of that name is used.
        """
        if isinstance(form, list) and form and isinstance(form[0], Symbol):
            return self.registry.lookup(form[0], self._caller_namespace(namespace))
        return None

    def _namespace_of(self, macro: MacroDef) -> Namespace:
        ns = self.namespaces.get(macro.namespace)
        return ns if ns is not None else Namespace(macro.namespace)

    def _bind(self, macro: MacroDef, call: list) -> dict[str, Node]:
        args = call[1:]
        fixed = macro.fixed_params
        if len(args) < len(fixed) or (macro.variadic_param is None and len(args) > len(fixed)):
            raise ArityMismatch(macro.name, macro.min_arity, len(args), macro.max_arity, call)
        bindings: dict[str, Node] = dict(zip(fixed, args))
        if macro.variadic_param is not None:
            bindings[macro.variadic_param] = list(args[len(fixed):])
        return bindings

    # Single-step head expansion
    def expand_1(self, call: Node, namespace: Namespace | str | None = None) -> Node:
        macro = self.macro_for(call, namespace)
        if macro is None:
            head = call[0] if isinstance(call, list) and call else call
            raise UnknownMacro(str(head), call)

        ctx = ExpansionContext(
            namespace=self._namespace_of(macro),
            bindings=self._bind(macro, call),
            allocator=self.allocator,
            macro_name=macro.name,
            helpers=self.helpers,
            max_nesting=self.max_nesting,
        )
        try:
            expansion = resolve_unquote(macro.body, ctx)
        except ExpansionError as ex:
            # Point nested failures at the call site that triggered them
            if ex.macro_name is None:
                ex.macro_name = macro.name
            if ex.node is None:
                ex.node = call
            raise
        if isinstance(expansion, Splice):
            expansion = [DO, *expansion.elements]
        logger.debug("Expanded %s -> %r", macro.name, expansion)
        return expansion

    def macroexpand_1(self, form: Node, namespace: Namespace | str | None = None) -> Node:
        """Expand `form` once if its head is a macro, otherwise return it as-is."""
        if self.macro_for(form, namespace) is None:
            return form
        return self.expand_1(form, namespace)

    # Full expansion
    def expand_all(self, node: Node, namespace: Namespace | str | None = None) -> Node:
        return self._expand_all(node, 0, self._caller_namespace(namespace))

    macroexpand_all = expand_all

    def _expand_all(self, node: Node, depth: int, namespace: Namespace | None) -> Node:
        cur = node
        macro = self.macro_for(cur, namespace)
        while macro is not None:
            if depth >= self.max_depth:
                raise ExpansionDepthExceeded(macro.name, self.max_depth, cur)
            cur = self.expand_1(cur, namespace)
            depth += 1
            macro = self.macro_for(cur, namespace)

        if not isinstance(cur, list) or not cur:
            return cur

        head = cur[0]
        # Do not recurse into (quote ...) or (syntax-quote ...) forms.
        if names_form(head, QUOTE) or names_form(head, SYNTAX_QUOTE):
            return cur
        # A binding vector is data, not a call: only its value positions expand
        if names_form(head, LET) and len(cur) > 1 and isinstance(cur[1], list):
            bindings = [self._expand_all(b, depth, namespace) for b in cur[1]]
            return [head, bindings, *(self._expand_all(c, depth, namespace) for c in cur[2:])]
        if head == TRY:
            return [head, *(self._expand_clause(c, depth, namespace) for c in cur[1:])]
        return [self._expand_all(child, depth, namespace) for child in cur]

    def _expand_clause(self, clause: Node, depth: int, namespace: Namespace | None) -> Node:
        """Expand one form inside `try`, leaving catch/finally heads and the catch name alone."""
        if isinstance(clause, list) and clause and clause[0] == CATCH:
            return [*clause[:2], *(self._expand_all(c, depth, namespace) for c in clause[2:])]
        if isinstance(clause, list) and clause and clause[0] == FINALLY:
            return [clause[0], *(self._expand_all(c, depth, namespace) for c in clause[1:])]
        return self._expand_all(clause, depth, namespace)

    def try_expand_1(self, call: Node, namespace: Namespace | str | None = None) -> ExpansionResult:
        try:
            return ExpansionResult(self.expand_1(call, namespace))
        except ExpansionError as ex:
            return ExpansionResult(error=ex)

    def try_expand_all(self, node: Node, namespace: Namespace | str | None = None) -> ExpansionResult:
        try:
            return ExpansionResult(self.expand_all(node, namespace))
        except ExpansionError as ex:
            return ExpansionResult(error=ex)
