import pytest

from synquote.errors import (
    ArityMismatch,
    ExpansionDepthExceeded,
    MalformedSplice,
    UnknownMacro,
)
from synquote.expander import Expander
from synquote.reader.parser import read_one
from synquote.types.namespace import Namespace
from synquote.types.symbol import Symbol


def S(text):
    return Symbol.parse(text)


# -------------------------
# Simple head-position macro
# -------------------------

def test_simple_macro_expansion(define, expander):
    define("inc", "[x]", "`(+ ~x 1)")
    assert expander.expand_1(read_one("(inc 5)")) == [S("my.macros/+"), 5, 1]


def test_body_may_be_plain_macro_time_code(define, expander):
    define("second-arg", "[a b]", "b")
    assert expander.expand_1(read_one("(second-arg 1 (f 2))")) == [Symbol("f"), 2]


def test_expand_1_unknown_macro(expander):
    form = read_one("(nope 1)")
    with pytest.raises(UnknownMacro) as err:
        expander.expand_1(form)
    assert err.value.name == "nope"
    assert err.value.node == form


def test_expand_1_requires_symbol_head(expander):
    with pytest.raises(UnknownMacro):
        expander.expand_1(read_one("(1 2)"))
    with pytest.raises(UnknownMacro):
        expander.expand_1(42)


def test_macroexpand_1_leaves_non_macro_forms(expander):
    form = read_one("(f 1)")
    assert expander.macroexpand_1(form) is form


# -------------------------
# Arity
# -------------------------

def test_too_few_arguments(define, expander):
    define("pair", "[x y]", "`(p ~x ~y)")
    with pytest.raises(ArityMismatch) as err:
        expander.expand_1(read_one("(pair 1)"))
    assert err.value.name == "pair"
    assert err.value.expected_min == 2
    assert err.value.got == 1
    assert err.value.node == read_one("(pair 1)")


def test_too_many_arguments_without_variadic(define, expander):
    define("pair", "[x y]", "`(p ~x ~y)")
    with pytest.raises(ArityMismatch) as err:
        expander.expand_1(read_one("(pair 1 2 3)"))
    assert err.value.expected_max == 2


def test_variadic_with_no_extra_arguments(define, expander):
    define("pair", "[x y & more]", "`(p ~x ~y ~more)")
    assert expander.expand_1(read_one("(pair 1 2)")) == [S("my.macros/p"), 1, 2, []]


def test_variadic_collects_remaining_arguments(define, expander):
    define("seq", "[& forms]", "`(do ~@forms)")
    assert expander.expand_1(read_one("(seq (a) (b))")) == [Symbol("do"), [Symbol("a")], [Symbol("b")]]


# -------------------------
# Top-level splice
# -------------------------

def test_top_level_splice_is_wrapped_in_do(define, expander):
    define("forms", "[& xs]", "`~@xs")
    assert expander.expand_1(read_one("(forms (a) (b))")) == [Symbol("do"), [Symbol("a")], [Symbol("b")]]


# -------------------------
# Hygiene
# -------------------------

def test_two_expansions_use_distinct_names(define, expander):
    define("with-tmp", "[v]", "`(let [t# ~v] (f t# t# t#))")
    one = expander.expand_1(read_one("(with-tmp 1)"))
    two = expander.expand_1(read_one("(with-tmp 1)"))
    t1, t2 = one[1][0], two[1][0]
    assert t1 != t2
    assert one[2][1:] == [t1, t1, t1]
    assert two[2][1:] == [t2, t2, t2]


def test_two_macros_with_same_marker_do_not_share(define, expander):
    define("m1", "[]", "`(f x#)")
    define("m2", "[]", "`(f x#)")
    assert expander.expand_1(read_one("(m1)"))[1] != expander.expand_1(read_one("(m2)"))[1]


def test_qualification_uses_definition_site(registry, allocator):
    registry.define("m", [], None, read_one("`(helper)"), "lib.macros")
    caller_ns = Namespace("app.main")
    expander = Expander(registry, allocator=allocator, namespaces={"app.main": caller_ns})
    assert expander.expand_1(read_one("(m)")) == [S("lib.macros/helper")]


def test_defining_namespace_aliases_apply(registry, allocator):
    lib = Namespace("lib.macros", aliases={"log": "lang.log"})
    registry.define("m", [], None, read_one("`(log/debug 1)"), "lib.macros")
    expander = Expander(registry, allocator=allocator, namespaces={"lib.macros": lib})
    assert expander.expand_1(read_one("(m)")) == [S("lang.log/debug"), 1]


# -------------------------
# Full expansion
# -------------------------

def test_expand_all_identity_for_non_macro(expander):
    form = read_one("(f (g 1) [2 3] \"s\")")
    assert expander.expand_all(form) == form
    assert expander.expand_all(5) == 5


def test_nested_macro_expansion(define, expander):
    """
    (wrapinc x) -> (inc x); (inc x) -> (+ x 1)
    """
    define("inc", "[x]", "`(+ ~x 1)")
    define("wrapinc", "[y]", "`(inc ~y)")
    assert expander.expand_1(read_one("(wrapinc 10)")) == [S("my.macros/inc"), 10]
    assert expander.expand_all(read_one("(wrapinc 10)")) == [S("my.macros/+"), 10, 1]


def test_macro_recursive_nested_lists(define, expander):
    define("inc", "[x]", "`(+ ~x 1)")
    assert expander.expand_all(read_one("((inc 1) (inc 2))")) == [
        [S("my.macros/+"), 1, 1],
        [S("my.macros/+"), 2, 1],
    ]


def test_inner_calls_revealed_after_outer_expansion(define, expander):
    define("inc", "[x]", "`(+ ~x 1)")
    define("twice", "[x]", "`(list (inc ~x) (inc ~x))")
    assert expander.expand_all(read_one("(twice 3)")) == [
        S("my.macros/list"), [S("my.macros/+"), 3, 1], [S("my.macros/+"), 3, 1],
    ]


def test_arguments_are_expanded_after_substitution(define, expander):
    define("inc", "[x]", "`(+ ~x 1)")
    define("id", "[x]", "x")
    assert expander.expand_all(read_one("(id (inc 1))")) == [S("my.macros/+"), 1, 1]


def test_quoted_forms_are_not_expanded(define, expander):
    define("inc", "[x]", "`(+ ~x 1)")
    form = read_one("(f '(inc 1))")
    assert expander.expand_all(form) == form


def test_self_recursive_macro_hits_depth_bound(define, registry, allocator):
    define("forever", "[x]", "`(forever ~x)")
    expander = Expander(registry, allocator=allocator, max_depth=10)
    with pytest.raises(ExpansionDepthExceeded) as err:
        expander.expand_all(read_one("(forever 1)"))
    assert err.value.name == "forever"
    assert err.value.depth == 10


def test_growing_recursive_macro_hits_depth_bound(define, registry, allocator):
    define("nest", "[x]", "`(f (nest ~x))")
    expander = Expander(registry, allocator=allocator, max_depth=10)
    with pytest.raises(ExpansionDepthExceeded):
        expander.expand_all(read_one("(nest 1)"))


def test_redefinition_does_not_change_earlier_expansion(define, expander):
    define("m", "[]", "`(old)")
    before = expander.expand_all(read_one("(m)"))
    define("m", "[]", "`(new)")
    assert before == [S("my.macros/old")]
    assert expander.expand_all(read_one("(m)")) == [S("my.macros/new")]


def test_expansion_does_not_mutate_input(define, expander):
    define("seq", "[& forms]", "`(do ~@forms)")
    form = read_one("(seq (a) (b))")
    snapshot = read_one("(seq (a) (b))")
    expander.expand_all(form)
    assert form == snapshot


# -------------------------
# Result values
# -------------------------

def test_try_expand_returns_values(define, expander):
    define("inc", "[x]", "`(+ ~x 1)")
    ok = expander.try_expand_all(read_one("(inc 1)"))
    assert ok.ok and ok.node == [S("my.macros/+"), 1, 1]

    failed = expander.try_expand_1(read_one("(inc)"))
    assert not failed.ok
    assert isinstance(failed.error, ArityMismatch)


def test_malformed_splice_names_macro_and_call_site(define, expander):
    define("bad", "[x]", "`(f ~@x)")
    call = read_one("(bad 1)")
    result = expander.try_expand_1(call)
    assert isinstance(result.error, MalformedSplice)
    assert result.error.macro_name == "bad"
    assert result.error.location == read_one("~@x")


def test_max_depth_from_environment(monkeypatch, registry):
    monkeypatch.setenv("SYNQUOTE_MAX_EXPANSION_DEPTH", "3")
    assert Expander(registry).max_depth == 3


# -------------------------
# Forms whose children are not all calls
# -------------------------

def test_let_binding_vector_is_not_a_call(define, expander):
    define("twice", "[x]", "`(do ~x ~x)")
    assert expander.expand_all(read_one("(let [twice 5] twice)")) == read_one("(let [twice 5] twice)")
    assert expander.expand_all(read_one("(let [a (twice 2)] (twice a))")) == read_one(
        "(let [a (do 2 2)] (do a a))"
    )
    assert expander.expand_all(read_one("(synquote.core/let [twice 5] twice)")) == read_one(
        "(synquote.core/let [twice 5] twice)"
    )


def test_try_clauses_keep_their_shape(define, expander):
    define("catch", "[& xs]", "`(broken)")
    define("twice", "[x]", "`(do ~x ~x)")
    form = read_one("(try (twice 1) (catch e (twice 2)) (finally (twice 3)))")
    assert expander.expand_all(form) == read_one("(try (do 1 1) (catch e (do 2 2)) (finally (do 3 3)))")


def test_core_qualified_quote_forms_are_not_expanded(define, expander):
    define("twice", "[x]", "`(do ~x ~x)")
    form = read_one("(list (synquote.core/quote (twice 1)) (synquote.core/syntax-quote (twice 2)))")
    assert expander.expand_all(form) == form


def test_local_named_like_a_macro(interp):
    interp.eval("(defmacro twice [x] `(do ~x ~x))")
    assert interp.eval("(let [twice 5] twice)") == 5
    assert interp.eval("(let [n (twice 3)] (+ n 1))") == 4


# -------------------------
# Same macro name in several namespaces
# -------------------------

def test_bare_heads_resolve_in_callers_namespace(registry, allocator):
    registry.define("helper", ["x"], None, read_one("`(a-impl ~x)"), "a")
    registry.define("helper", ["x"], None, read_one("`(b-impl ~x)"), "b")
    expander = Expander(registry, allocator=allocator)
    assert expander.expand_1(read_one("(helper 1)"), "a") == [S("a/a-impl"), 1]
    assert expander.expand_1(read_one("(helper 1)"), "b") == [S("b/b-impl"), 1]
    assert expander.expand_all(read_one("(a/helper 1)"), "b") == [S("a/a-impl"), 1]
    # not defined in, nor referred into, namespace c
    assert expander.macroexpand_1(read_one("(helper 1)"), "c") == read_one("(helper 1)")


def test_same_macro_name_in_two_namespaces(interp):
    interp.eval("(in-ns 'a)")
    interp.eval("(defmacro helper [x] `(+ ~x 1))")
    interp.eval("(defmacro outer [x] `(helper ~x))")
    assert interp.eval("(outer 1)") == 2

    interp.eval("(in-ns 'b)")
    interp.eval("(defmacro helper [x] `(* ~x 10))")
    assert interp.eval("(helper 1)") == 10
    assert interp.macroexpand_1("(helper 1)") == read_one("(synquote.core/* 1 10)")

    interp.eval("(in-ns 'a)")
    assert interp.eval("(outer 1)") == 2
    assert interp.eval("(helper 1)") == 2

    interp.eval("(in-ns 'c)")
    assert interp.eval("(a/outer 1)") == 2
    assert interp.eval("(b/helper 1)") == 10


def test_local_macro_shadows_referred_name(interp):
    interp.eval("(defmacro max [& xs] `(list ~@xs))")
    assert interp.eval("(max 1 2)") == [1, 2]
    assert interp.eval("(synquote.core/max 1 2)") == 2
