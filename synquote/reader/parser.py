"""
  Reader: lexer and parser for synquote source text.

- Streaming, lazy parsing
- Emits Python primitives:

    - nil -> None, true/false -> bool
    - lists (...) and vectors [...] -> Python list
    - symbols -> Symbol (`ns/name` is qualified)
    - :keywords -> Keyword
    - strings -> str
    - numbers -> int/float
    - 'x  -> (quote x)
    - `x  -> (syntax-quote x)
    - ~x  -> (unquote x)
    - ~@x -> (unquote-splicing x)
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from synquote import SExpression
from synquote.errors import SynquoteSyntaxError
from synquote.types.keyword import Keyword
from synquote.types.symbol import Symbol


TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<quote>['`])"  # ' and `
    r"|(?P<unquote>~@|~)"  # ~ and ~@
    r"|(?P<lparen>[(\[])"  # ( or [
    r"|(?P<rparen>[)\]])"  # ) or ]
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<symbol>[^\s()\[\]\'`~",;]+)'  # fallback: symbols, numbers, keywords
    r")",
    re.DOTALL,
)

INT_RE = re.compile(r"[+-]?\d+")
FLOAT_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")

QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("syntax-quote"),
    "~": Symbol("unquote"),
    "~@": Symbol("unquote-splicing"),
}

CLOSERS = {"(": ")", "[": "]"}

STRING_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        if source[pos].isspace() or source[pos] == ",":
            # commas are whitespace
            pos += 1
            continue
        m = TOKEN_RE.match(source, pos)
        if not m or m.end() == pos:
            if source[pos] == '"':
                raise SynquoteSyntaxError(f"Unterminated string at {pos}")
            raise SynquoteSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
        pos = m.end()
        if m.group("comment"):
            continue
        for nm in ("quote", "unquote", "lparen", "rparen", "string", "symbol"):
            if m.group(nm):
                yield nm, m.group(nm)
                break


def _read_string(token: str) -> str:
    body = token[1:-1]
    out = []
    i = 0
    while i < len(body):
        c = body[i]
        if c == "\\":
            i += 1
            esc = body[i]
            if esc not in STRING_ESCAPES:
                raise SynquoteSyntaxError(f"Unsupported escape \\{esc} in string")
            out.append(STRING_ESCAPES[esc])
        else:
            out.append(c)
        i += 1
    return "".join(out)


def read_atom(token: str) -> SExpression:
    if token == "nil":
        return None
    if token == "true":
        return True
    if token == "false":
        return False
    if INT_RE.fullmatch(token):
        return int(token)
    if FLOAT_RE.fullmatch(token):
        return float(token)
    if token.startswith(":"):
        if len(token) == 1:
            raise SynquoteSyntaxError("Keyword needs a name after ':'")
        return Keyword(token[1:])
    return Symbol.parse(token)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> SExpression:
        tok_type, tok_val = self.advance()
        if tok_type is None:
            raise SynquoteSyntaxError("Unexpected end of input")

        if tok_type == "symbol":
            return read_atom(tok_val)

        if tok_type == "string":
            return _read_string(tok_val)

        # Quote forms
        if tok_type in ("quote", "unquote"):
            if self.peek()[0] is None:
                raise SynquoteSyntaxError(f"Expected a form after {tok_val!r}")
            return [QUOTE_FORMS[tok_val], self.parse_expr()]

        if tok_type == "lparen":
            closer = CLOSERS[tok_val]
            items = []
            while True:
                nxt_type, nxt_val = self.peek()
                if nxt_type is None:
                    raise SynquoteSyntaxError(f"Unmatched {tok_val!r}")
                if nxt_type == "rparen":
                    self.advance()
                    if nxt_val != closer:
                        raise SynquoteSyntaxError(
                            f"Expected {closer!r} to close {tok_val!r}, got {nxt_val!r}"
                        )
                    return items
                items.append(self.parse_expr())

        if tok_type == "rparen":
            raise SynquoteSyntaxError(f"Unexpected {tok_val!r}")

        raise SynquoteSyntaxError(f"Unknown token: {tok_type} {tok_val}")

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read_string(source: str) -> list[SExpression]:
    """Read every form in `source`."""
    return list(TokenStream(lex(source)).parse_all())


def read_one(source: str) -> SExpression:
    """Read exactly one form from `source`."""
    forms = read_string(source)
    if len(forms) != 1:
        raise SynquoteSyntaxError(f"Expected exactly one form, got {len(forms)}")
    return forms[0]
