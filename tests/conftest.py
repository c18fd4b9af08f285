import io

import pytest

from synquote.expander import Expander
from synquote.gensym import GensymAllocator
from synquote.interpreter import Interpreter
from synquote.reader.parser import read_one
from synquote.types.expansion_context import ExpansionContext
from synquote.types.macro_registry import MacroRegistry
from synquote.types.namespace import Namespace


@pytest.fixture
def allocator():
    return GensymAllocator()


@pytest.fixture
def registry():
    return MacroRegistry()


@pytest.fixture
def expander(registry, allocator):
    return Expander(registry, allocator=allocator, max_depth=50)


@pytest.fixture
def ns():
    return Namespace("my.macros")


@pytest.fixture
def ctx(ns, allocator):
    """A fresh expansion context defined in `my.macros`."""
    return ExpansionContext(namespace=ns, allocator=allocator)


@pytest.fixture
def define(registry):
    """Define a macro from source-text parameter vector and body."""
    from synquote.evaluation.special_forms.defmacro_form import parse_params

    def _define(name, params, body, namespace="my.macros"):
        fixed, variadic = parse_params(read_one(params))
        return registry.define(name, fixed, variadic, read_one(body), namespace)

    return _define


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def interp(out, allocator):
    return Interpreter(namespace="user", allocator=allocator, out=out)
