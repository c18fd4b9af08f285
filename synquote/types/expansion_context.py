from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from synquote import Node
from synquote.config import get_max_template_nesting
from synquote.gensym import GENSYM, GensymAllocator
from synquote.types.namespace import Namespace
from synquote.types.symbol import Symbol


@dataclass
class ExpansionContext:
    """State owned by a single expansion call.

    `rename_table` maps the spelling of an auto-gensym symbol (`x#`) to the
    fresh symbol allocated for it; it lives exactly as long as one expansion,
    so two expansions of the same macro never share renamed names.
    """

    namespace: Namespace
    bindings: dict[str, Node] = field(default_factory=dict)
    rename_table: dict[str, Symbol] = field(default_factory=dict)
    allocator: GensymAllocator = GENSYM
    macro_name: str | None = None
    helpers: dict[str, Callable] | None = None
    max_nesting: int = field(default_factory=get_max_template_nesting)
