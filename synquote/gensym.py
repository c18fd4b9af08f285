"""Process-wide gensym allocation.

Every name handed out is the prefix followed by a decimal counter value. The
counter is shared by all expansions that use the same allocator, so no two
calls to `next` ever observe the same value, even from different threads.
"""

from __future__ import annotations

import threading
from itertools import count

from synquote.types.symbol import Symbol


class GensymAllocator:
    __slots__ = ("_counter", "_lock")

    def __init__(self, start: int = 1):
        self._counter = count(start)
        self._lock = threading.Lock()

    def next(self, prefix: str) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{prefix}{n}"

    def gen_sym(self, prefix: str = "G") -> Symbol:
        return Symbol(self.next(prefix))


# Shared by every expansion that is not given an allocator explicitly
GENSYM = GensymAllocator()
