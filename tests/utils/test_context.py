# tests/utils/test_context.py
"""
Tests for correlation ID context management.
"""

import asyncio

from portfolio_timeline.utils.context import (
    clear_correlation_id,
    correlation_scope,
    get_correlation_id,
    new_correlation_id,
    set_correlation_id,
)


class TestCorrelationId:
    """Tests for the correlation ID helpers."""

    def test_default_is_none(self):
        assert get_correlation_id() is None

    def test_set_and_clear(self):
        set_correlation_id("abc")
        assert get_correlation_id() == "abc"

        clear_correlation_id()
        assert get_correlation_id() is None

    def test_new_ids_are_short_and_unique(self):
        first, second = new_correlation_id(), new_correlation_id()

        assert len(first) == 12
        assert first != second


class TestCorrelationScope:
    """Tests for correlation_scope()."""

    def test_explicit_id_restored_afterwards(self):
        with correlation_scope("run-1") as active:
            assert active == "run-1"
            assert get_correlation_id() == "run-1"

        assert get_correlation_id() is None

    def test_generates_when_none_active(self):
        with correlation_scope() as active:
            assert active
            assert get_correlation_id() == active

    def test_reuses_outer_id(self):
        with correlation_scope("outer"):
            with correlation_scope() as inner:
                assert inner == "outer"

    def test_nested_explicit_restores_outer(self):
        with correlation_scope("outer"):
            with correlation_scope("inner"):
                assert get_correlation_id() == "inner"
            assert get_correlation_id() == "outer"

    def test_restored_after_exception(self):
        try:
            with correlation_scope("boom"):
                raise RuntimeError("fail")
        except RuntimeError:
            pass

        assert get_correlation_id() is None

    def test_isolated_between_tasks(self):
        async def tagged(name: str) -> str | None:
            with correlation_scope(name):
                await asyncio.sleep(0)
                return get_correlation_id()

        async def main():
            return await asyncio.gather(tagged("a"), tagged("b"))

        assert asyncio.run(main()) == ["a", "b"]
