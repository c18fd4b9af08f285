from __future__ import annotations

from typing import Any


class SynquoteError(Exception):
    """ Base class for all synquote errors"""
    pass


class SynquoteSyntaxError(SynquoteError):
    """ Raised when source text or a special form is malformed"""


class SynquoteNameError(SynquoteError):
    """ Raised when a symbol is used before it is bound"""


class SynquoteTypeError(SynquoteError):
    """ Raised when the types of arguments passed to a function are incorrect"""


class ExpansionError(SynquoteError):
    """ Base class for failures raised while expanding a macro call.

    Carries the macro name and, where available, the originating call-site
    node so the host can point at a source location.
    """

    def __init__(self, message: str, macro_name: str | None = None, node: Any = None):
        super().__init__(message)
        self.macro_name = macro_name
        self.node = node


class UnknownMacro(ExpansionError):
    """ Raised when expand_1 is given a call whose head is not a registered macro"""

    def __init__(self, name: str, node: Any = None):
        super().__init__(f"{name} does not name a macro", name, node)
        self.name = name


class ArityMismatch(ExpansionError):
    """ Raised when a macro call supplies the wrong number of arguments"""

    def __init__(
        self,
        name: str,
        expected_min: int,
        got: int,
        expected_max: int | None = None,
        node: Any = None,
    ):
        if expected_max is None:
            wanted = f"at least {expected_min}"
        elif expected_max == expected_min:
            wanted = f"exactly {expected_min}"
        else:
            wanted = f"{expected_min} to {expected_max}"
        super().__init__(
            f"Macro {name} expects {wanted} argument(s), got {got}", name, node
        )
        self.name = name
        self.expected_min = expected_min
        self.expected_max = expected_max
        self.got = got


class MalformedSplice(ExpansionError):
    """ Raised when unquote-splicing resolves to something that is not a sequence"""

    def __init__(self, location: Any, value: Any, macro_name: str | None = None):
        where = f" in macro {macro_name}" if macro_name else ""
        super().__init__(
            f"unquote-splicing must produce a sequence{where}, got {value!r}",
            macro_name,
            location,
        )
        self.location = location
        self.value = value


class ExpansionDepthExceeded(ExpansionError):
    """ Raised when fixpoint expansion does not terminate within the depth bound"""

    def __init__(self, name: str, depth: int, node: Any = None):
        super().__init__(
            f"Expansion of {name} exceeded maximum depth {depth}; "
            f"the macro is probably infinitely recursive",
            name,
            node,
        )
        self.name = name
        self.depth = depth


class UnsupportedNestedTemplate(ExpansionError):
    """ Raised when syntax-quote nesting goes beyond the configured bound"""

    def __init__(self, depth: int, macro_name: str | None = None, node: Any = None):
        super().__init__(
            f"syntax-quote nested {depth} levels deep is not supported",
            macro_name,
            node,
        )
        self.depth = depth


class SynquoteThrow(SynquoteError):
    """ Raised by (throw value) when value is not already an exception"""

    def __init__(self, value: Any):
        super().__init__(f"Thrown: {value!r}")
        self.value = value
