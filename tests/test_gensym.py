import threading

from hypothesis import given, strategies as st

from synquote.gensym import GENSYM, GensymAllocator
from synquote.types.symbol import Symbol


def test_next_is_prefix_plus_counter():
    alloc = GensymAllocator()
    assert alloc.next("x") == "x1"
    assert alloc.next("x") == "x2"
    assert alloc.next("y__") == "y__3"


def test_gen_sym_uniqueness():
    """
    Each call to gen_sym should produce a unique symbol.
    """
    alloc = GensymAllocator()
    s1 = alloc.gen_sym()
    s2 = alloc.gen_sym()
    s3 = alloc.gen_sym("X")
    s4 = alloc.gen_sym("X")
    assert isinstance(s1, Symbol)
    assert s1 != s2
    assert s3 != s4
    assert s1.id.startswith("G")
    assert s3.id.startswith("X")


def test_process_allocator_is_shared():
    a = GENSYM.next("p")
    b = GENSYM.next("p")
    assert a != b


@given(st.lists(st.text(alphabet="abcxyz-_", min_size=1, max_size=5), min_size=1, max_size=50))
def test_names_never_repeat(prefixes):
    alloc = GensymAllocator()
    names = [alloc.next(p) for p in prefixes]
    counters = [int(n[len(p):]) for n, p in zip(names, prefixes)]
    assert counters == sorted(counters)
    assert len(set(counters)) == len(counters)


def test_concurrent_next_never_reuses_a_value():
    alloc = GensymAllocator()
    per_thread = 500
    results: list[list[str]] = [[] for _ in range(8)]

    def work(bucket):
        for _ in range(per_thread):
            bucket.append(alloc.next("t"))

    threads = [threading.Thread(target=work, args=(b,)) for b in results]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    everything = [n for bucket in results for n in bucket]
    assert len(everything) == 8 * per_thread
    assert len(set(everything)) == len(everything)
