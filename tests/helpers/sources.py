"""
In-memory page sources for engine tests.
"""

import asyncio
from typing import Any

from scrollfeed.models import User
from scrollfeed.pagination import ResultPage


def make_users(count: int, page: int = 1) -> list[User]:
    """Build ``count`` distinct users tagged with the page they belong to."""
    return [
        User.model_validate(
            {
                "name": {"first": f"User{page}", "last": f"No{i}"},
                "email": f"user{page}.{i}@example.com",
            }
        )
        for i in range(count)
    ]


class ScriptedPageSource:
    """
    Replays a fixed list of responses, one per fetch.

    Each response is a list of items (an empty list ends the collection) or an
    exception instance to raise. When the script runs out, an empty page is
    returned. With ``hold=True`` every fetch blocks until ``release()``.
    """

    def __init__(self, responses: list[Any] | None = None, hold: bool = False) -> None:
        self.responses = list(responses or [])
        self.calls: list[tuple[int, int]] = []
        self.closed = False
        self.hold = hold
        self._released = asyncio.Event()

    def release(self) -> None:
        self._released.set()

    async def fetch_page(self, page: int, page_size: int) -> ResultPage[Any]:
        self.calls.append((page, page_size))
        if self.hold:
            await self._released.wait()
        response = self.responses.pop(0) if self.responses else []
        if isinstance(response, BaseException):
            raise response
        return ResultPage(items=tuple(response), page=page)

    async def aclose(self) -> None:
        self.closed = True

    @property
    def requested_pages(self) -> list[int]:
        return [page for page, _ in self.calls]
