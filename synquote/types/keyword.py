from __future__ import annotations
import sys


class Keyword:
    """Self-evaluating `:name` literal; opaque to macro expansion."""

    __slots__ = ("id",)

    def __init__(self, name: str):
        self.id = sys.intern(name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Keyword) and self.id == other.id

    def __hash__(self) -> int:
        return hash((Keyword, self.id))

    def __repr__(self):
        return f"Keyword({self.id!r})"

    def __str__(self):
        return f":{self.id}"
