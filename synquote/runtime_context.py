from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, TextIO
import sys

from synquote import Node
from synquote.config import CORE_NAMESPACE, LOG_NAMESPACE
from synquote.expander import Expander
from synquote.types.macro_registry import MacroRegistry
from synquote.types.namespace import Namespace

DiagnosticFn = Callable[[str, Node], None]


@dataclass
class RuntimeContext:
    """Everything a host evaluation needs besides the lexical environment.

    One instance per Interpreter; nothing here is process-global except the
    gensym allocator the expander was given.
    """

    registry: MacroRegistry
    expander: Expander
    namespaces: dict[str, Namespace]
    namespace: Namespace
    core_names: list[str] = field(default_factory=list)
    out: TextIO = field(default_factory=lambda: sys.stdout)
    emit_diagnostic: DiagnosticFn | None = None

    def in_ns(self, name: str) -> Namespace:
        """Make `name` the current namespace, creating it if needed."""
        ns = self.namespaces.get(name)
        if ns is None:
            ns = Namespace(name)
            ns.refer(CORE_NAMESPACE, self.core_names)
            ns.add_alias("log", LOG_NAMESPACE)
            self.namespaces[name] = ns
        self.namespace = ns
        return ns
