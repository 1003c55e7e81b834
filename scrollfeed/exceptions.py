from collections.abc import Generator
from contextlib import contextmanager
from enum import Enum

import httpx
from pydantic import ValidationError as PydanticValidationError


class ErrorKind(str, Enum):
    """Failure category recorded in ``CursorState.last_error``."""

    NETWORK = "network"
    DECODE = "decode"


class ScrollfeedError(Exception):
    """Base exception for all scrollfeed errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class NetworkFailure(ScrollfeedError):
    """Raised when a page request is rejected, times out, or returns a non-success status."""

    kind = ErrorKind.NETWORK


class HttpStatusError(NetworkFailure):
    """Raised when the remote endpoint answers with a non-2xx status."""

    def __init__(
        self, status_code: int, url: str | None = None, original_error: Exception | None = None
    ) -> None:
        msg = f"HTTP {status_code}"
        if url:
            msg += f" from {url}"
        super().__init__(msg, original_error)
        self.status_code = status_code
        self.url = url


class RequestTimeoutError(NetworkFailure):
    """Raised when a page request times out."""

    def __init__(
        self, message: str = "Request timed out", original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)


class DecodeFailure(ScrollfeedError):
    """Raised when a response body does not match the paginated-collection shape."""

    kind = ErrorKind.DECODE

    def __init__(
        self, message: str, page: int | None = None, original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)
        self.page = page


class InvalidTransitionError(ScrollfeedError):
    """Raised when a CursorState transition is not allowed from the current state."""

    def __init__(self, transition: str, reason: str) -> None:
        super().__init__(f"Cannot apply '{transition}': {reason}")
        self.transition = transition
        self.reason = reason


class CoalescerDisposedError(ScrollfeedError):
    """Raised when a disposed DebounceCoalescer receives a new value."""

    def __init__(self, message: str = "Coalescer has been disposed") -> None:
        super().__init__(message)


@contextmanager
def handle_http_errors(url: str | None = None) -> Generator[None, None, None]:
    """
    Context manager that catches httpx exceptions
    and raises the appropriate NetworkFailure subclass.

    Args:
        url: Optional request URL for better error messages

    Usage:
        with handle_http_errors(url=base_url):
            response = await client.get(base_url, params=params)
            response.raise_for_status()
    """
    try:
        yield
    except httpx.HTTPStatusError as e:
        raise HttpStatusError(
            status_code=e.response.status_code, url=url or str(e.request.url), original_error=e
        ) from e
    except httpx.TimeoutException as e:
        raise RequestTimeoutError(original_error=e) from e
    except httpx.HTTPError as e:
        # Unknown transport error: wrap in generic NetworkFailure
        raise NetworkFailure(
            message=f"Request failed ({type(e).__name__}): {e}", original_error=e
        ) from e


@contextmanager
def handle_decode_errors(page: int | None = None) -> Generator[None, None, None]:
    """
    Context manager that turns pydantic validation errors (which also cover
    malformed JSON) into DecodeFailure.

    Args:
        page: Page index the body was fetched for
    """
    try:
        yield
    except PydanticValidationError as e:
        raise DecodeFailure(
            message=f"Malformed page body for page {page}: {e.error_count()} validation error(s)",
            page=page,
            original_error=e,
        ) from e
