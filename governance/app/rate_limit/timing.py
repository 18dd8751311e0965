"""Debounce and throttle wrappers scheduled on the asyncio event loop.

These work on a single wrapped callable rather than on bucket keys, and
each instance owns at most one pending timer.
"""

import asyncio
from typing import Any, Callable, Dict, Optional, Set, Tuple


class _ScheduledCall:
    """Shared plumbing: one pending TimerHandle plus the arguments to use."""

    def __init__(
        self,
        fn: Callable[..., Any],
        wait_ms: float,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        if wait_ms < 0:
            raise ValueError("wait_ms must not be negative")
        self.fn = fn
        self.wait_ms = wait_ms
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending_args: Tuple[Any, ...] = ()
        self._pending_kwargs: Dict[str, Any] = {}
        self._tasks: Set[asyncio.Task] = set()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @property
    def pending(self) -> bool:
        """Whether a deferred call is scheduled."""
        return self._handle is not None

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending_args = ()
        self._pending_kwargs = {}

    def _schedule(self, delay_ms: float) -> None:
        self._handle = self.loop.call_later(delay_ms / 1000, self._fire)

    def _fire(self) -> None:
        args, kwargs = self._pending_args, self._pending_kwargs
        self._handle = None
        self._pending_args = ()
        self._pending_kwargs = {}
        self._invoke(args, kwargs)

    def _invoke(self, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> None:
        result = self.fn(*args, **kwargs)
        # Coroutine functions are run as tasks so callers can wrap either kind
        if asyncio.iscoroutine(result):
            task = self.loop.create_task(result)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)


class Debouncer(_ScheduledCall):
    """Delay invocation until ``wait_ms`` has passed without a new call.

    Trailing edge only: every call cancels the pending timer and the last
    call's arguments win.

    Usage:
        save_draft = Debouncer(store.save, wait_ms=500)
        for keystroke in keystrokes:
            save_draft(text)  # only the final text is saved
    """

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._pending_args = args
        self._pending_kwargs = kwargs
        self._schedule(self.wait_ms)


class Throttler(_ScheduledCall):
    """Invoke at most once per ``wait_ms``.

    A call made after the interval has elapsed runs immediately. Calls made
    inside the interval coalesce into one trailing call scheduled for the end
    of the interval, using the most recent arguments.
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        wait_ms: float,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        super().__init__(fn, wait_ms, loop)
        self._last_call: Optional[float] = None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        now = self.loop.time()
        elapsed_ms = (
            None if self._last_call is None else (now - self._last_call) * 1000
        )

        if elapsed_ms is None or elapsed_ms >= self.wait_ms:
            self.cancel()
            self._last_call = now
            self._invoke(args, kwargs)
            return

        self._pending_args = args
        self._pending_kwargs = kwargs
        if self._handle is None:
            self._schedule(self.wait_ms - elapsed_ms)

    def _fire(self) -> None:
        self._last_call = self.loop.time()
        super()._fire()


def debounce(fn: Callable[..., Any], wait_ms: float) -> Debouncer:
    """Create a Debouncer for ``fn``."""
    return Debouncer(fn, wait_ms)


def throttle(fn: Callable[..., Any], wait_ms: float) -> Throttler:
    """Create a Throttler for ``fn``."""
    return Throttler(fn, wait_ms)
