from __future__ import annotations

import logging
import threading
from typing import Iterable

from synquote import Node
from synquote.config import get_default_namespace
from synquote.types.macro_def import MacroDef
from synquote.types.namespace import Namespace
from synquote.types.symbol import Symbol

logger = logging.getLogger(__name__)


class MacroRegistry:
    """
    Mapping of (namespace, name) to macro definitions.

    - Lookups are plain dict reads and never mutate the registry.
    - `define` registers or replaces an entry; replacing a macro does not
      affect trees that were already expanded, nothing is cached.
    - Two namespaces may each define a macro with the same name.
    - A qualified symbol finds exactly the macro defined in its namespace. A
      bare name resolves through the caller's namespace (its refers, then its
      own definitions); without one, the most recent definition of that name
      is used.
    """

    def __init__(self):
        self.macros: dict[tuple[str, str], MacroDef] = {}
        self._lock = threading.Lock()

    def define(
        self,
        name: str,
        fixed_params: Iterable[str],
        variadic_param: str | None,
        body: Node,
        namespace: str | None = None,
    ) -> MacroDef:
        macro = MacroDef(
            name=name,
            fixed_params=tuple(fixed_params),
            variadic_param=variadic_param,
            body=body,
            namespace=namespace if namespace is not None else get_default_namespace(),
        )
        key = (macro.namespace, name)
        with self._lock:
            # re-insert so the newest definition of a name comes last
            replaced = self.macros.pop(key, None) is not None
            self.macros[key] = macro
        logger.debug("%s macro %s/%s", "Redefined" if replaced else "Defined", macro.namespace, name)
        return macro

    def _latest(self, name: str) -> MacroDef | None:
        for macro in reversed(list(self.macros.values())):
            if macro.name == name:
                return macro
        return None

    def lookup(self, name: str | Symbol, namespace: Namespace | None = None) -> MacroDef | None:
        if isinstance(name, str):
            name = Symbol(name)
        if not isinstance(name, Symbol):
            return None
        if name.namespace is None:
            if namespace is None:
                return self._latest(name.id)
            name = namespace.resolve(name)
        return self.macros.get((name.namespace, name.id))

    def undefine(self, name: str | Symbol, namespace: Namespace | None = None) -> bool:
        with self._lock:
            macro = self.lookup(name, namespace)
            if macro is None:
                return False
            del self.macros[(macro.namespace, macro.name)]
            return True

    def is_macro(self, name: object, namespace: Namespace | None = None) -> bool:
        return isinstance(name, (str, Symbol)) and self.lookup(name, namespace) is not None

    def names(self) -> list[str]:
        """Qualified names of every registered macro, sorted."""
        return sorted(f"{ns}/{name}" for ns, name in self.macros)

    def __contains__(self, name: object) -> bool:
        return self.is_macro(name)

    def __len__(self) -> int:
        return len(self.macros)
