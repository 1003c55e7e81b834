from dataclasses import dataclass

DEFAULT_BASE_URL = "https://randomuser.me/api/"
DEFAULT_PAGE_SIZE = 10
DEFAULT_SCROLL_BUFFER = 150.0
DEFAULT_DEBOUNCE_DELAY = 0.5  # seconds


@dataclass
class FeedOptions:
    """
    Tunables for an incremental feed.

    Attributes:
        page_size: Number of items requested per page
        scroll_buffer: Look-ahead margin (in scroll distance units) before
            the end of the content at which the next page is requested
        debounce_delay: Quiescence window, in seconds, for input coalescing
    """

    page_size: int = DEFAULT_PAGE_SIZE
    scroll_buffer: float = DEFAULT_SCROLL_BUFFER
    debounce_delay: float = DEFAULT_DEBOUNCE_DELAY

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Check that every option is within range.

        Raises:
            ValueError: If an option is out of range
        """
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")
        if self.scroll_buffer < 0:
            raise ValueError(f"scroll_buffer must be >= 0, got {self.scroll_buffer}")
        if self.debounce_delay < 0:
            raise ValueError(f"debounce_delay must be >= 0, got {self.debounce_delay}")
