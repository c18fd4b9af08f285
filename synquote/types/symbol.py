from __future__ import annotations
import sys

from synquote.config import AUTO_GENSYM_MARKER


class Symbol:
    """An identifier, optionally qualified with a namespace (`ns/name`)."""

    __slots__ = ("id", "namespace")

    def __init__(self, name: str, namespace: str | None = None):
        # Intern to ensure fast equality/hash and reduce memory
        self.id = sys.intern(name)
        self.namespace = sys.intern(namespace) if namespace is not None else None

    @classmethod
    def parse(cls, text: str) -> Symbol:
        """Split `ns/name` into a qualified symbol; `/` on its own is a bare name."""
        if "/" in text and text != "/" and not text.startswith("/"):
            ns, _, name = text.partition("/")
            if name:
                return cls(name, ns)
        return cls(text)

    @property
    def name(self) -> str:
        return self.id

    @property
    def is_qualified(self) -> bool:
        return self.namespace is not None

    @property
    def is_auto_gensym(self) -> bool:
        return (
            self.namespace is None
            and len(self.id) > len(AUTO_GENSYM_MARKER)
            and self.id.endswith(AUTO_GENSYM_MARKER)
        )

    def strip_marker(self) -> str:
        if self.is_auto_gensym:
            return self.id[: -len(AUTO_GENSYM_MARKER)]
        return self.id

    def with_namespace(self, namespace: str | None) -> Symbol:
        return Symbol(self.id, namespace)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Symbol)
            and self.id == other.id
            and self.namespace == other.namespace
        )

    def __hash__(self) -> int:
        return hash((self.namespace, self.id))

    def __repr__(self):
        if self.namespace is None:
            return f"Symbol({self.id!r})"
        return f"Symbol({self.id!r}, {self.namespace!r})"

    def __str__(self):
        if self.namespace is None:
            return self.id
        return f"{self.namespace}/{self.id}"
