"""
Pagination data structures for scrollfeed.

A ResultPage is produced once per successful fetch and never mutated.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ResultPage(Generic[T]):
    """
    Represents a single fetched page.

    Attributes:
        items: Items of this page, in server order
        page: The page index the items were fetched for
    """

    items: tuple[T, ...]
    page: int

    @property
    def count(self) -> int:
        """Number of items in this page."""
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        """Returns True if this page signals the end of the collection."""
        return not self.items
