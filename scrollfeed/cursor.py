"""
Cursor state for an incremental feed.

The cursor is a single immutable value. Every change goes through one of the
transition methods below and produces a new value, so the owner replaces its
reference in one assignment and never observes a half-applied update.
"""

from dataclasses import dataclass, replace

from .exceptions import ErrorKind, InvalidTransitionError


@dataclass(frozen=True)
class CursorState:
    """
    Pagination progress of one feed.

    Attributes:
        current_page: Next page to request (1-based)
        is_loading: True while a request is in flight
        has_more: False once the collection signalled its end; never reverts
        last_error: Kind of the most recent failure, cleared by the next success
    """

    current_page: int = 1
    is_loading: bool = False
    has_more: bool = True
    last_error: ErrorKind | None = None

    def __post_init__(self) -> None:
        if self.current_page < 1:
            raise ValueError(f"current_page must be >= 1, got {self.current_page}")

    @property
    def can_request(self) -> bool:
        """True if a request for ``current_page`` may be dispatched now."""
        return self.has_more and not self.is_loading

    @property
    def is_exhausted(self) -> bool:
        return not self.has_more

    # --- TRANSITIONS ---

    def begin_request(self) -> "CursorState":
        """Reserve the single in-flight slot."""
        if self.is_loading:
            raise InvalidTransitionError("begin_request", "a request is already in flight")
        if not self.has_more:
            raise InvalidTransitionError("begin_request", "the collection is exhausted")
        return replace(self, is_loading=True)

    def page_loaded(self) -> "CursorState":
        """A non-empty page arrived: advance and clear the last error."""
        self._require_loading("page_loaded")
        return replace(
            self, current_page=self.current_page + 1, is_loading=False, last_error=None
        )

    def exhausted(self) -> "CursorState":
        """An empty page arrived: no further requests, ever."""
        self._require_loading("exhausted")
        return replace(self, has_more=False, is_loading=False)

    def request_failed(self, kind: ErrorKind) -> "CursorState":
        """
        The request failed. The page is not advanced and ``has_more`` is kept,
        so the next trigger re-requests the same page.
        """
        self._require_loading("request_failed")
        return replace(self, is_loading=False, last_error=kind)

    def _require_loading(self, transition: str) -> None:
        if not self.is_loading:
            raise InvalidTransitionError(transition, "no request is in flight")
