"""Tests for the debounce / throttle wrappers."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from governance.app.rate_limit import Debouncer, Throttler, debounce, throttle

WAIT_MS = 50


async def settle(ms: float = WAIT_MS * 3) -> None:
    await asyncio.sleep(ms / 1000)


class TestDebouncer:
    """Tests for trailing-edge debouncing."""

    def test_negative_wait_rejected(self):
        with pytest.raises(ValueError):
            Debouncer(Mock(), -1)

    @pytest.mark.asyncio
    async def test_burst_collapses_to_last_call(self):
        fn = Mock()
        debounced = debounce(fn, WAIT_MS)

        debounced("a")
        debounced("b")
        debounced("c", flush=True)
        fn.assert_not_called()
        assert debounced.pending is True

        await settle()

        fn.assert_called_once_with("c", flush=True)
        assert debounced.pending is False

    @pytest.mark.asyncio
    async def test_each_call_restarts_timer(self):
        fn = Mock()
        debounced = debounce(fn, 100)

        debounced(1)
        await asyncio.sleep(0.06)
        debounced(2)
        await asyncio.sleep(0.06)
        fn.assert_not_called()

        await settle(200)
        fn.assert_called_once_with(2)

    @pytest.mark.asyncio
    async def test_separate_bursts_each_fire(self):
        fn = Mock()
        debounced = debounce(fn, WAIT_MS)

        debounced("first")
        await settle()
        debounced("second")
        await settle()

        assert [c.args for c in fn.call_args_list] == [("first",), ("second",)]

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_call(self):
        fn = Mock()
        debounced = debounce(fn, WAIT_MS)

        debounced("x")
        debounced.cancel()
        await settle()

        fn.assert_not_called()
        assert debounced.pending is False

    @pytest.mark.asyncio
    async def test_coroutine_function_is_awaited(self):
        fn = AsyncMock()
        debounced = debounce(fn, WAIT_MS)

        debounced("draft")
        await settle()

        fn.assert_awaited_once_with("draft")


class TestThrottler:
    """Tests for leading-edge throttling with a trailing call."""

    def test_negative_wait_rejected(self):
        with pytest.raises(ValueError):
            Throttler(Mock(), -5)

    @pytest.mark.asyncio
    async def test_first_call_runs_immediately(self):
        fn = Mock()
        throttled = throttle(fn, WAIT_MS)

        throttled("a")

        fn.assert_called_once_with("a")
        assert throttled.pending is False

    @pytest.mark.asyncio
    async def test_calls_inside_interval_coalesce(self):
        fn = Mock()
        throttled = throttle(fn, WAIT_MS)

        throttled("a")
        throttled("b")
        throttled("c")
        assert fn.call_count == 1
        assert throttled.pending is True

        await settle()

        assert [c.args for c in fn.call_args_list] == [("a",), ("c",)]

    @pytest.mark.asyncio
    async def test_call_after_interval_runs_immediately(self):
        fn = Mock()
        throttled = throttle(fn, WAIT_MS)

        throttled(1)
        await settle()
        throttled(2)

        assert [c.args for c in fn.call_args_list] == [(1,), (2,)]

    @pytest.mark.asyncio
    async def test_cancel_drops_trailing_call(self):
        fn = Mock()
        throttled = throttle(fn, WAIT_MS)

        throttled("a")
        throttled("b")
        throttled.cancel()
        await settle()

        fn.assert_called_once_with("a")

    @pytest.mark.asyncio
    async def test_coroutine_function_is_awaited(self):
        fn = AsyncMock(return_value=None)
        throttled = throttle(fn, WAIT_MS)

        throttled("q")
        await settle()

        fn.assert_awaited_once_with("q")
