from __future__ import annotations

import logging
import sys
from typing import Callable, TextIO

from synquote import LispValue, Node
from synquote.builtins import register
from synquote.config import get_default_namespace
from synquote.debug_utils.pprint import pformat
from synquote.errors import ExpansionError
from synquote.evaluation.environment import Environment
from synquote.evaluation.evaluator import evaluate
from synquote.evaluation.special_forms import REFERRED_SPECIAL_FORMS
from synquote.expander import Expander
from synquote.gensym import GensymAllocator
from synquote.reader.parser import read_one, read_string
from synquote.runtime_context import RuntimeContext, DiagnosticFn
from synquote.types.macro_registry import MacroRegistry
from synquote.types.symbol import Symbol

logger = logging.getLogger(__name__)


def log_diagnostic(message: str, node: Node) -> None:
    """Default diagnostic sink: a WARNING on this module's logger."""
    if node is None:
        logger.warning("%s", message)
    else:
        logger.warning("%s\n  at: %s", message, pformat(node))


class Interpreter:
    """
    Reads, expands and evaluates source text, keeping macros, namespaces and
    globals between calls.

    The macroexpand_1 / macroexpand methods return expansions without
    evaluating them.
    """

    def __init__(
        self,
        namespace: str | None = None,
        max_depth: int | None = None,
        allocator: GensymAllocator | None = None,
        emit_diagnostic: DiagnosticFn | None = None,
        out: TextIO | None = None,
    ):
        self.env = Environment()
        out = out if out is not None else sys.stdout
        core_names = register(self.env, out) + list(REFERRED_SPECIAL_FORMS)

        registry = MacroRegistry()
        namespaces: dict = {}
        expander = Expander(registry, allocator=allocator, max_depth=max_depth, namespaces=namespaces)
        self.runtime = RuntimeContext(
            registry=registry,
            expander=expander,
            namespaces=namespaces,
            namespace=None,  # set by in_ns below
            core_names=core_names,
            out=out,
            emit_diagnostic=emit_diagnostic if emit_diagnostic is not None else log_diagnostic,
        )
        self.runtime.in_ns(namespace or get_default_namespace())

    @property
    def registry(self) -> MacroRegistry:
        return self.runtime.registry

    @property
    def expander(self) -> Expander:
        return self.runtime.expander

    @property
    def namespace(self) -> str:
        return self.runtime.namespace.name

    def define(self, name: str, fn: Callable[[Environment, list], LispValue]) -> Symbol:
        """Bind a host function `fn(env, args)` in the current namespace."""
        qualified = Symbol(name, self.namespace)
        self.runtime.namespace.refers.pop(name, None)
        self.env.define_global(qualified, fn)
        return qualified

    def emit_diagnostic(self, message: str, node: Node = None) -> None:
        self.runtime.emit_diagnostic(message, node)

    def _form(self, source: str | Node) -> Node:
        return read_one(source) if isinstance(source, str) else source

    def eval_form(self, form: Node) -> LispValue:
        try:
            return evaluate(form, self.env, self.runtime)
        except ExpansionError as ex:
            self.emit_diagnostic(str(ex), ex.node if ex.node is not None else form)
            raise

    def eval(self, source: str) -> LispValue:
        """Evaluate every form in `source` and return the value of the last one."""
        result: LispValue = None
        for form in read_string(source):
            result = self.eval_form(form)
        return result

    def macroexpand_1(self, source: str | Node) -> Node:
        """Expand the single form in `source` one step, without evaluating it."""
        return self.expander.macroexpand_1(self._form(source), self.runtime.namespace)

    def macroexpand(self, source: str | Node) -> Node:
        """Expand the single form in `source` to a fixpoint, without evaluating it."""
        return self.expander.macroexpand_all(self._form(source), self.runtime.namespace)
