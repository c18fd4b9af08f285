from __future__ import annotations

from dataclasses import dataclass

from synquote import Node


@dataclass(frozen=True)
class MacroDef:
    """A registered macro: parameter list, body template, defining namespace."""

    name: str
    fixed_params: tuple[str, ...]
    variadic_param: str | None
    body: Node
    namespace: str

    @property
    def min_arity(self) -> int:
        return len(self.fixed_params)

    @property
    def max_arity(self) -> int | None:
        return None if self.variadic_param is not None else len(self.fixed_params)

    def __str__(self) -> str:
        params = list(self.fixed_params)
        if self.variadic_param is not None:
            params += ["&", self.variadic_param]
        return f"(defmacro {self.namespace}/{self.name} [{' '.join(params)}] ...)"
