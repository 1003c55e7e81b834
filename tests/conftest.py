"""
Shared pytest fixtures and configuration for scrollfeed tests.

This module provides common fixtures used across unit and integration tests,
including scripted page sources, a fake loop clock, and sample payloads.
"""

from typing import Any

import httpx
import pytest

from scrollfeed import FeedOptions
from tests.helpers.fake_loop import FakeClockLoop
from tests.helpers.sources import ScriptedPageSource, make_users


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with in-memory dependencies")
    config.addinivalue_line("markers", "integration: Tests wiring the engine to an HTTP transport")
    config.addinivalue_line("markers", "slow: Slow tests that may take longer")


@pytest.fixture
def fake_loop() -> FakeClockLoop:
    """A loop clock that only moves when the test advances it (milliseconds)."""
    return FakeClockLoop()


@pytest.fixture
def options() -> FeedOptions:
    return FeedOptions(page_size=3, scroll_buffer=150)


@pytest.fixture
def three_page_source() -> ScriptedPageSource:
    """Two full pages, one short page, then the end of the collection."""
    return ScriptedPageSource(
        [make_users(3, page=1), make_users(3, page=2), make_users(1, page=3), []]
    )


@pytest.fixture
def sample_user_payload() -> dict[str, Any]:
    """One element of a randomuser-style ``results`` array."""
    return {
        "gender": "female",
        "name": {"title": "Ms", "first": "Ada", "last": "Lovelace"},
        "email": "ada.lovelace@example.com",
    }


@pytest.fixture
def collection_payload(sample_user_payload) -> Any:
    """Factory for a full paginated-collection body."""

    def _build(page: int, count: int) -> dict[str, Any]:
        results = []
        for i in range(count):
            user = dict(sample_user_payload)
            user["email"] = f"user{page}.{i}@example.com"
            results.append(user)
        return {"results": results, "info": {"page": page, "results": count, "seed": "abc"}}

    return _build


@pytest.fixture
def mock_http_client():
    """
    Factory for an httpx.AsyncClient whose requests are answered by ``handler``.
    """

    def _build(handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _build
