"""Run-time environment for the reference host.

The Environment stores bindings of Symbols to evaluated values and supports
nested scopes via an `outer` link. Locals are always unqualified symbols;
globals live in the root frame under namespace-qualified symbols, so a bare
name that is not bound lexically is resolved through the current namespace
(its own definitions, then its refers).
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from synquote import LispValue
from synquote.errors import SynquoteNameError, SynquoteSyntaxError
from synquote.types.namespace import Namespace
from synquote.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer

    @property
    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this frame.

        Raises SynquoteSyntaxError if a qualified name is bound anywhere but
        the root frame.
        """
        if not isinstance(name, Symbol):
            raise SynquoteSyntaxError(f"Cannot bind {name!r}: not a symbol")
        if name.namespace is not None and self.outer is not None:
            raise SynquoteSyntaxError(f"Can't bind qualified name: {name}")
        self.vars[name] = value

    def define_global(self, name: Symbol, value: LispValue) -> None:
        self.root.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol, namespace: Namespace | None = None) -> LispValue:
        """Look up the value bound to `name`.

        Order of resolution:
        1) Lexical chain (locals) for unqualified names
        2) Root frame under the name as resolved by `namespace`
           (aliases, refers, or the namespace's own definitions)
        Raises SynquoteNameError if not found.
        """
        if name.namespace is None:
            env = self.find(name)
            if env is not None:
                return env.vars[name]
        resolved = namespace.resolve(name) if namespace is not None else name
        root = self.root
        if resolved in root.vars:
            return root.vars[resolved]
        raise SynquoteNameError(f"Unable to resolve symbol: {name}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("{")
            buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
            buffer.write("}")
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()
