"""Render nodes back to reader syntax.

to_source: single-line rendering.
pformat:   multi-line rendering that breaks lists longer than the line width,
           indenting children under their operator.
"""

from synquote import Node
from synquote.types.keyword import Keyword
from synquote.types.symbol import Symbol

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_line_length": 80,
    "indent": 2,
}

READER_PREFIXES = {
    Symbol("quote"): "'",
    Symbol("syntax-quote"): "`",
    Symbol("unquote"): "~",
    Symbol("unquote-splicing"): "~@",
}

_STRING_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def _atom(obj) -> str:
    if obj is None:
        return "nil"
    if obj is True:
        return "true"
    if obj is False:
        return "false"
    if isinstance(obj, str):
        return '"' + "".join(_STRING_ESCAPES.get(c, c) for c in obj) + '"'
    if isinstance(obj, (Symbol, Keyword)):
        return str(obj)
    if isinstance(obj, BaseException):
        return f"#error {type(obj).__name__}({str(obj)!r})"
    if callable(obj):
        return f"#function {getattr(obj, '__name__', type(obj).__name__)}"
    return str(obj)


def _prefix_of(obj):
    if isinstance(obj, list) and len(obj) == 2 and isinstance(obj[0], Symbol):
        return READER_PREFIXES.get(obj[0])
    return None


def to_source(obj: Node) -> str:
    prefix = _prefix_of(obj)
    if prefix is not None:
        return prefix + to_source(obj[1])
    if isinstance(obj, (list, tuple)):
        return "(" + " ".join(to_source(x) for x in obj) + ")"
    return _atom(obj)


# ----------------- Pretty printer -----------------
def pformat(obj: Node, options: dict = DEFAULT_OPTIONS, column: int = 0) -> str:
    max_len = options.get("max_line_length", 80)
    indent = options.get("indent", 2)

    flat = to_source(obj)
    if column + len(flat) <= max_len:
        return flat

    prefix = _prefix_of(obj)
    if prefix is not None:
        return prefix + pformat(obj[1], options, column + len(prefix))
    if not isinstance(obj, (list, tuple)) or not obj:
        return flat

    # (head first-arg
    #   rest...)
    head = pformat(obj[0], options, column + 1)
    child_col = column + indent
    lines = ["(" + head]
    for child in obj[1:]:
        lines.append(" " * child_col + pformat(child, options, child_col))
    return "\n".join(lines) + ")"


def pprint(obj: Node, options: dict = DEFAULT_OPTIONS, file=None) -> None:
    print(pformat(obj, options), file=file)
