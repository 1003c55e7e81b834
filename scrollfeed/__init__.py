from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_DEBOUNCE_DELAY,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SCROLL_BUFFER,
    FeedOptions,
)
from .cursor import CursorState
from .debounce import DebounceCoalescer
from .engine import PaginationEngine
from .exceptions import (
    CoalescerDisposedError,
    DecodeFailure,
    ErrorKind,
    HttpStatusError,
    InvalidTransitionError,
    NetworkFailure,
    RequestTimeoutError,
    ScrollfeedError,
)
from .models import CollectionResponse, Item, PageInfo, PersonName, User
from .pagination import ResultPage
from .scroll import ScrollMetrics, detect
from .source import HttpPageSource, PageSource

__all__ = [
    "PaginationEngine",
    "CursorState",
    "ResultPage",
    "DebounceCoalescer",
    # Scroll detection
    "detect",
    "ScrollMetrics",
    # Sources
    "PageSource",
    "HttpPageSource",
    # Models
    "Item",
    "User",
    "PersonName",
    "PageInfo",
    "CollectionResponse",
    # Configuration
    "FeedOptions",
    "DEFAULT_BASE_URL",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_SCROLL_BUFFER",
    "DEFAULT_DEBOUNCE_DELAY",
    # Exceptions
    "ScrollfeedError",
    "ErrorKind",
    "NetworkFailure",
    "HttpStatusError",
    "RequestTimeoutError",
    "DecodeFailure",
    "InvalidTransitionError",
    "CoalescerDisposedError",
]
