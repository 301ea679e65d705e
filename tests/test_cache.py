"""Tests for LayoutCache: per-type layout memoisation with LRU eviction."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from reflection_diff.cache import FieldLayout, LayoutCache


class CountingBuilder:
    """Layout builder recording every type it was asked to build."""

    def __init__(self) -> None:
        self.calls: list[type] = []

    def __call__(self, cls: type) -> FieldLayout:
        self.calls.append(cls)
        return FieldLayout(declared=(cls.__name__.lower(),), excluded=frozenset())


class A:
    pass


class B:
    pass


class C:
    pass


class TestLayoutCache:
    def test_miss_then_hit(self) -> None:
        cache = LayoutCache()
        build = CountingBuilder()
        first = cache.get(A, build)
        second = cache.get(A, build)
        assert first is second
        assert build.calls == [A]

    def test_sizes(self) -> None:
        cache = LayoutCache(max_size=4)
        assert cache.max_size == 4
        assert cache.curr_size == 0
        cache.get(A, CountingBuilder())
        assert cache.curr_size == 1

    def test_lru_eviction(self) -> None:
        cache = LayoutCache(max_size=2)
        build = CountingBuilder()
        cache.get(A, build)
        cache.get(B, build)
        cache.get(A, build)  # A is now most recently used
        cache.get(C, build)  # evicts B
        cache.get(A, build)
        cache.get(B, build)
        assert build.calls == [A, B, C, B]

    def test_clear(self) -> None:
        cache = LayoutCache()
        build = CountingBuilder()
        cache.get(A, build)
        cache.clear()
        assert cache.curr_size == 0
        cache.get(A, build)
        assert build.calls == [A, A]

    def test_instances_do_not_share_state(self) -> None:
        first, second = LayoutCache(), LayoutCache()
        first.get(A, CountingBuilder())
        assert second.curr_size == 0

    def test_concurrent_access(self) -> None:
        cache = LayoutCache(max_size=2)
        build = CountingBuilder()
        types = [A, B, C] * 50

        with ThreadPoolExecutor(max_workers=8) as pool:
            layouts = list(pool.map(lambda cls: cache.get(cls, build), types))

        assert [layout.declared for layout in layouts] == [
            (cls.__name__.lower(),) for cls in types
        ]
        assert cache.curr_size <= 2
