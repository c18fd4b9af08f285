"""Namespaces used to qualify the bare symbols of a template.

A Namespace records where a macro was written. Bare symbols inside the macro's
template resolve against it, never against the namespace of the call site:

- a name the namespace *refers* from elsewhere (e.g. the core builtins)
  resolves to the namespace it was referred from;
- any other bare name resolves to the namespace itself;
- a qualified symbol whose namespace part is one of this namespace's aliases
  is rewritten to the aliased full namespace name.
"""

from __future__ import annotations

from typing import Iterable

from synquote.types.symbol import Symbol


class Namespace:
    """Name plus alias and refer tables."""

    __slots__ = ("name", "aliases", "refers")

    def __init__(
        self,
        name: str,
        aliases: dict[str, str] | None = None,
        refers: dict[str, str] | None = None,
    ):
        self.name: str = name
        self.aliases: dict[str, str] = dict(aliases or {})
        self.refers: dict[str, str] = dict(refers or {})

    def add_alias(self, alias: str, namespace: str) -> None:
        self.aliases[alias] = namespace

    def refer(self, namespace: str, names: Iterable[str]) -> None:
        """Make each bare name in `names` resolve to `namespace`."""
        for n in names:
            self.refers[n] = namespace

    def resolve(self, sym: Symbol) -> Symbol:
        """Return the fully qualified form of `sym` as seen from this namespace."""
        if sym.namespace is not None:
            full = self.aliases.get(sym.namespace)
            return sym.with_namespace(full) if full is not None else sym
        return sym.with_namespace(self.refers.get(sym.id, self.name))

    def __repr__(self):
        return f"<Namespace {self.name}>"
