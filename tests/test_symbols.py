import pytest

from synquote.types.keyword import Keyword
from synquote.types.namespace import Namespace
from synquote.types.symbol import Symbol


@pytest.mark.parametrize(
    "text, name, namespace",
    [
        ("x", "x", None),
        ("log/debug", "debug", "log"),
        ("clojure.core/println", "println", "clojure.core"),
        ("/", "/", None),
        ("x#", "x#", None),
    ],
)
def test_symbol_parse(text, name, namespace):
    sym = Symbol.parse(text)
    assert sym.name == name
    assert sym.namespace == namespace
    assert str(sym) == text


def test_symbol_equality_is_structural():
    assert Symbol("x") == Symbol("x")
    assert Symbol("x", "a") == Symbol("x", "a")
    assert Symbol("x") != Symbol("x", "a")
    assert Symbol("x", "a") != Symbol("x", "b")
    assert len({Symbol("x"), Symbol("x"), Symbol("x", "a")}) == 2


def test_symbol_not_equal_to_strings_or_keywords():
    assert Symbol("x") != "x"
    assert Symbol("x") != Keyword("x")


def test_auto_gensym_marker():
    assert Symbol("x#").is_auto_gensym
    assert Symbol("x#").strip_marker() == "x"
    assert not Symbol("x").is_auto_gensym
    # The marker on its own, or on a qualified name, is an ordinary symbol
    assert not Symbol("#").is_auto_gensym
    assert not Symbol("x#", "ns").is_auto_gensym


def test_keyword():
    assert Keyword("a") == Keyword("a")
    assert str(Keyword("a")) == ":a"
    assert Keyword("a") != Keyword("b")


def test_namespace_resolve_bare_symbol_to_itself():
    ns = Namespace("app.core")
    assert ns.resolve(Symbol("helper")) == Symbol("helper", "app.core")


def test_namespace_resolve_refers_and_aliases():
    ns = Namespace("app.core")
    ns.refer("lang.core", ["println", "let"])
    ns.add_alias("log", "lang.log")
    assert ns.resolve(Symbol("println")) == Symbol("println", "lang.core")
    assert ns.resolve(Symbol("debug", "log")) == Symbol("debug", "lang.log")
    # Unknown namespace parts are left alone
    assert ns.resolve(Symbol("f", "other")) == Symbol("f", "other")
