"""Built-in functions for the reference host.

Core arithmetic, comparison and sequence helpers live in the core namespace;
`debug`, `info` and `warn` live in the log namespace and write through the
standard logging module. Every builtin takes (env, args).
"""
from __future__ import annotations

import logging
from fractions import Fraction
from functools import reduce
from typing import Callable, TextIO

from synquote import LispValue
from synquote.config import CORE_NAMESPACE, LOG_NAMESPACE
from synquote.debug_utils.pprint import to_source
from synquote.errors import SynquoteTypeError
from synquote.evaluation.environment import Environment
from synquote.types.keyword import Keyword
from synquote.types.symbol import Symbol

# Messages emitted by (log/debug ...) and friends from evaluated code
code_logger = logging.getLogger(LOG_NAMESPACE)

Builtin = Callable[[Environment, list], LispValue]


def _numbers(name: str, args: list[LispValue]) -> list:
    for a in args:
        if isinstance(a, bool) or not isinstance(a, (int, float, Fraction)):
            raise SynquoteTypeError(f"All arguments to {name} must be numbers, got {a!r}")
    return args


def _normalize(n):
    if isinstance(n, Fraction) and n.denominator == 1:
        return n.numerator
    return n


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, args: list[LispValue]) -> LispValue:
    return _normalize(sum(_numbers("+", args)))


def sub(env: Environment, args: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    nums = _numbers("-", args)
    if not nums:
        raise SynquoteTypeError("- requires at least 1 argument")
    if len(nums) == 1:
        return -nums[0]
    return _normalize(reduce(lambda a, b: a - b, nums))


def mul(env: Environment, args: list[LispValue]) -> LispValue:
    return _normalize(reduce(lambda a, b: a * b, _numbers("*", args), 1))


def div(env: Environment, args: list[LispValue]) -> LispValue:
    """Exact division on integers: (/ 1 4) is 1/4. Raises ZeroDivisionError on zero."""
    nums = _numbers("/", args)
    if not nums:
        raise SynquoteTypeError("/ requires at least 1 argument")
    if len(nums) == 1:
        nums = [1, *nums]

    def step(a, b):
        if isinstance(a, float) or isinstance(b, float):
            return a / b
        return Fraction(a) / Fraction(b)

    return _normalize(reduce(step, nums))


def inc(env: Environment, args: list[LispValue]) -> LispValue:
    return _numbers("inc", args)[0] + 1


def dec(env: Environment, args: list[LispValue]) -> LispValue:
    return _numbers("dec", args)[0] - 1


def _chain(name: str, op) -> Builtin:
    def compare(env: Environment, args: list[LispValue]) -> LispValue:
        nums = _numbers(name, args)
        return all(op(a, b) for a, b in zip(nums, nums[1:]))

    compare.__name__ = name
    return compare


def equals(env: Environment, args: list[LispValue]) -> LispValue:
    return all(a == b for a, b in zip(args, args[1:]))


# -------------------------------
# Sequences
# -------------------------------
def make_list(env: Environment, args: list[LispValue]) -> LispValue:
    return list(args)


def _seq(name: str, value: LispValue) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple, str)):
        return list(value)
    raise SynquoteTypeError(f"{name} expects a sequence, got {value!r}")


def first(env: Environment, args: list[LispValue]) -> LispValue:
    seq = _seq("first", args[0] if args else None)
    return seq[0] if seq else None


def rest(env: Environment, args: list[LispValue]) -> LispValue:
    return _seq("rest", args[0] if args else None)[1:]


def count(env: Environment, args: list[LispValue]) -> LispValue:
    return len(_seq("count", args[0] if args else None))


def concat(env: Environment, args: list[LispValue]) -> LispValue:
    out: list = []
    for a in args:
        out.extend(_seq("concat", a))
    return out


def make_range(env: Environment, args: list[LispValue]) -> LispValue:
    if not 1 <= len(args) <= 3:
        raise SynquoteTypeError("range expects 1 to 3 arguments")
    return list(range(*_numbers("range", args)))


def maximum(env: Environment, args: list[LispValue]) -> LispValue:
    if not args:
        raise SynquoteTypeError("max requires at least 1 argument")
    return max(_numbers("max", args))


def minimum(env: Environment, args: list[LispValue]) -> LispValue:
    if not args:
        raise SynquoteTypeError("min requires at least 1 argument")
    return min(_numbers("min", args))


def is_nil(env: Environment, args: list[LispValue]) -> LispValue:
    return len(args) == 1 and args[0] is None


# -------------------------------
# Strings and output
# -------------------------------
def display(value: LispValue) -> str:
    """Text of a value as println / str show it: strings and nil unquoted."""
    if value is None:
        return ""
    if isinstance(value, (str, Symbol, Keyword)):
        return str(value)
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    return to_source(value)


def make_str(env: Environment, args: list[LispValue]) -> LispValue:
    return "".join(display(a) for a in args)


def make_println(out: TextIO) -> Builtin:
    def println(env: Environment, args: list[LispValue]) -> LispValue:
        print(" ".join(display(a) for a in args), file=out)
        return None

    return println


def _log_at(level: int) -> Builtin:
    def log(env: Environment, args: list[LispValue]) -> LispValue:
        code_logger.log(level, "%s", " ".join(display(a) for a in args))
        return None

    log.__name__ = logging.getLevelName(level).lower()
    return log


CORE_BUILTINS: dict[str, Builtin] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "inc": inc,
    "dec": dec,
    "=": equals,
    "<": _chain("<", lambda a, b: a < b),
    ">": _chain(">", lambda a, b: a > b),
    "<=": _chain("<=", lambda a, b: a <= b),
    ">=": _chain(">=", lambda a, b: a >= b),
    "list": make_list,
    "first": first,
    "rest": rest,
    "count": count,
    "concat": concat,
    "range": make_range,
    "max": maximum,
    "min": minimum,
    "nil?": is_nil,
    "str": make_str,
}

LOG_BUILTINS: dict[str, Builtin] = {
    "debug": _log_at(logging.DEBUG),
    "info": _log_at(logging.INFO),
    "warn": _log_at(logging.WARNING),
}


def register(env: Environment, out: TextIO) -> list[str]:
    """Install the builtins in the root of `env`; return the core names to refer."""
    core = dict(CORE_BUILTINS)
    core["println"] = make_println(out)
    for name, fn in core.items():
        env.define_global(Symbol(name, CORE_NAMESPACE), fn)
    for name, fn in LOG_BUILTINS.items():
        env.define_global(Symbol(name, LOG_NAMESPACE), fn)
    return list(core)
