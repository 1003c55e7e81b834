"""
Incremental pagination engine.

The engine owns one CursorState and one append-only store. It is driven by
explicit triggers (``request_next_page`` or ``on_scroll``) and runs on a
single asyncio event loop.
"""

import asyncio
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from ._logging import logger
from .config import FeedOptions
from .cursor import CursorState
from .exceptions import DecodeFailure, NetworkFailure, ScrollfeedError
from .pagination import ResultPage
from .scroll import detect
from .source import PageSource

T = TypeVar("T")

StateListener = Callable[[CursorState], Any]


class PaginationEngine(Generic[T]):
    """
    Loads a paginated collection one page at a time.

    At most one request is in flight at any time. The guard and the
    reservation happen in the same synchronous step of ``request_next_page``,
    so two triggers issued in the same loop iteration cannot both dispatch.

    Usage:
        async with PaginationEngine(HttpPageSource(item_model=User)) as engine:
            await engine.request_next_page()          # initial page
            ...
            engine.on_scroll(offset, viewport, content)
    """

    def __init__(
        self,
        source: PageSource[T],
        options: FeedOptions | None = None,
        *,
        listeners: Iterable[StateListener] = (),
        owns_source: bool = True,
    ):
        self.source = source
        self.options = options or FeedOptions()
        self.owns_source = owns_source

        self._state = CursorState()
        self._store: list[T] = []
        self._task: asyncio.Task[None] | None = None
        self._last_exception: ScrollfeedError | None = None
        self._disposed = False
        self._listeners: list[StateListener] = list(listeners)

    # --- READ-ONLY VIEW (presentation layer) ---

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def items(self) -> tuple[T, ...]:
        """Snapshot of every loaded item in page order."""
        return tuple(self._store)

    @property
    def in_flight(self) -> asyncio.Task[None] | None:
        """The pending request task, if any."""
        if self._task is not None and not self._task.done():
            return self._task
        return None

    @property
    def last_exception(self) -> ScrollfeedError | None:
        """Exception behind ``state.last_error``; None after the next success."""
        return self._last_exception

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def add_listener(self, listener: StateListener) -> None:
        """Register ``listener(state)``, called after every state transition."""
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        self._listeners.remove(listener)

    # --- TRIGGERS ---

    def request_next_page(self) -> "asyncio.Task[None] | None":
        """
        Dispatch a request for the current page unless one is in flight or the
        collection is exhausted. Must be called from a running event loop.

        Returns:
            The request task, or None if the call was a no-op.
        """
        if self._disposed:
            logger.debug("Ignoring request on disposed engine", extra={"operation": "request"})
            return None

        if not self._state.can_request:
            logger.debug(
                "Ignoring request",
                extra={
                    "operation": "request",
                    "page": self._state.current_page,
                    "is_loading": self._state.is_loading,
                    "has_more": self._state.has_more,
                },
            )
            return None

        # Resolve the loop first so a missing loop cannot leave the slot reserved
        loop = asyncio.get_running_loop()
        self._transition(self._state.begin_request())
        if self._disposed:
            # A listener tore the engine down while observing the dispatch
            return None
        page = self._state.current_page

        logger.info(
            "Requesting page",
            extra={"operation": "request", "page": page, "page_size": self.options.page_size},
        )
        self._task = loop.create_task(self._load(page))
        return self._task

    def on_scroll(
        self, offset: float, viewport_size: float, content_size: float
    ) -> "asyncio.Task[None] | None":
        """Feed one scroll sample; requests the next page when near the end."""
        triggered = detect(
            offset,
            viewport_size,
            content_size,
            has_more=self._state.has_more,
            is_loading=self._state.is_loading,
            buffer=self.options.scroll_buffer,
        )
        if not triggered:
            return None
        return self.request_next_page()

    async def wait(self) -> None:
        """Wait for the in-flight request, if any, to resolve."""
        task = self.in_flight
        if task is not None:
            await asyncio.wait([task])

    # --- RESOLUTION ---

    async def _load(self, page: int) -> None:
        try:
            result = await self.source.fetch_page(page, self.options.page_size)
        except ScrollfeedError as e:
            self._fail(page, e)
            return
        except asyncio.CancelledError:
            logger.debug("Request cancelled", extra={"operation": "request", "page": page})
            raise
        except Exception as e:
            # Unknown error from a custom source: wrap in generic NetworkFailure
            error = NetworkFailure(
                message=f"Page source raised {type(e).__name__}: {e}", original_error=e
            )
            self._fail(page, error)
            return

        if self._disposed:
            return

        if not isinstance(result, ResultPage):
            self._fail(
                page,
                DecodeFailure(
                    f"Page source returned {type(result).__name__}, expected ResultPage",
                    page=page,
                ),
            )
            return

        self._apply(result)

    def _apply(self, result: ResultPage[T]) -> None:
        if result.is_empty:
            self._transition(self._state.exhausted())
            logger.info(
                "Collection exhausted", extra={"operation": "load", "page": result.page}
            )
            return

        self._store.extend(result.items)
        self._last_exception = None
        self._transition(self._state.page_loaded())
        logger.info(
            "Page loaded",
            extra={
                "operation": "load",
                "page": result.page,
                "count": result.count,
                "total": len(self._store),
            },
        )

    def _fail(self, page: int, error: ScrollfeedError) -> None:
        if self._disposed:
            return

        kind = getattr(error, "kind", NetworkFailure.kind)
        self._last_exception = error
        self._transition(self._state.request_failed(kind))
        logger.warning(
            "Page request failed",
            extra={"operation": "load", "page": page, "error_kind": kind.value},
            exc_info=error,
        )

    def _transition(self, new_state: CursorState) -> None:
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("State listener failed", extra={"operation": "notify"})

    # --- TEARDOWN ---

    def dispose(self) -> None:
        """
        Stop the engine. Any in-flight request is cancelled and its result is
        discarded; later triggers are no-ops.
        """
        if self._disposed:
            return
        self._disposed = True
        self._listeners.clear()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        logger.debug("Engine disposed", extra={"operation": "dispose"})

    async def aclose(self) -> None:
        """Dispose, wait for the cancelled request to unwind, and close the source."""
        task = self._task
        self.dispose()
        if task is not None:
            # A cancelled task resolves here without re-raising
            await asyncio.wait([task])
        if self.owns_source:
            await self.source.aclose()

    async def __aenter__(self) -> "PaginationEngine[T]":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
