"""
Debounced delivery of rapidly changing input.

A DebounceCoalescer forwards only the last value of a burst of ``notify``
calls, once the input has been quiet for ``delay`` seconds. It is bound to one
asyncio event loop and keeps a single pending value, never a queue.
"""

import asyncio
import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ._logging import logger, redact_value
from .config import DEFAULT_DEBOUNCE_DELAY
from .exceptions import CoalescerDisposedError

V = TypeVar("V")


@dataclass
class _PendingCall(Generic[V]):
    value: V
    deadline: float
    generation: int
    handle: asyncio.TimerHandle


class DebounceCoalescer(Generic[V]):
    """
    Coalesces a stream of values into one downstream call per quiet period.

    Each ``notify`` starts a new generation and restarts the timer. A timer
    only delivers if its generation is still the latest one, so a superseded
    timer can never fire the callback even if its cancellation raced.

    The callback may be a plain function or a coroutine function; coroutine
    results are scheduled as tasks and cancelled on ``dispose``.

    Usage:
        search = DebounceCoalescer(run_query, delay=0.5)
        entry.on_change(search.notify)
        ...
        search.dispose()
    """

    def __init__(
        self,
        callback: Callable[[V], Any],
        delay: float = DEFAULT_DEBOUNCE_DELAY,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")

        self.delay = delay
        self._callback = callback
        self._loop = loop
        self._generation = 0
        self._pending: _PendingCall[V] | None = None
        self._tasks: set[asyncio.Future[Any]] = set()
        self._disposed = False

    # --- INSPECTION ---

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        """True while a debounce window is open."""
        return self._pending is not None

    @property
    def deadline(self) -> float | None:
        """Loop time at which the pending value will be delivered."""
        return self._pending.deadline if self._pending is not None else None

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    # --- OPERATIONS ---

    def notify(self, value: V) -> None:
        """Record ``value`` as the pending value and restart the quiet window."""
        if self._disposed:
            raise CoalescerDisposedError()

        loop = self._get_loop()
        self._cancel_timer()

        self._generation += 1
        generation = self._generation
        handle = loop.call_later(self.delay, self._fire, generation)
        self._pending = _PendingCall(
            value=value,
            deadline=loop.time() + self.delay,
            generation=generation,
            handle=handle,
        )

        logger.debug(
            "Debounce window restarted",
            extra={"generation": generation, "value": redact_value(value)},
        )

    def flush(self) -> bool:
        """
        Deliver the pending value now instead of waiting for the window.

        Returns:
            True if a value was delivered.
        """
        if self._pending is None:
            return False
        pending = self._pending
        pending.handle.cancel()
        self._pending = None
        self._deliver(pending.value, pending.generation)
        return True

    def cancel(self) -> None:
        """Drop the pending value without delivering it."""
        if self._pending is not None:
            logger.debug(
                "Pending value dropped", extra={"generation": self._pending.generation}
            )
        self._cancel_timer()

    def rebind(self, callback: Callable[[V], Any]) -> None:
        """Replace the downstream callback; a pending value goes to the new one."""
        self._callback = callback

    def dispose(self) -> None:
        """Cancel the pending timer and any running callback tasks. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        self._cancel_timer()
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        logger.debug("Coalescer disposed", extra={"generation": self._generation})

    def __enter__(self) -> "DebounceCoalescer[V]":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()

    # --- INTERNALS ---

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def _cancel_timer(self) -> None:
        if self._pending is not None:
            self._pending.handle.cancel()
            self._pending = None

    def _fire(self, generation: int) -> None:
        pending = self._pending
        if self._disposed or pending is None or pending.generation != generation:
            # Superseded or cancelled after the handle was already queued
            return
        self._pending = None
        self._deliver(pending.value, generation)

    def _deliver(self, value: V, generation: int) -> None:
        logger.debug(
            "Delivering debounced value",
            extra={"generation": generation, "value": redact_value(value)},
        )
        result = self._callback(value)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result, loop=self._get_loop())
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    def _task_done(self, task: "asyncio.Future[Any]") -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Debounced callback task failed",
                extra={"generation": self._generation},
                exc_info=exc,
            )
