import logging

import pytest

from scrollfeed import DebounceCoalescer, PaginationEngine
from scrollfeed._logging import redact_value
from scrollfeed.exceptions import NetworkFailure
from tests.helpers.sources import ScriptedPageSource, make_users

# --- Tests ---


@pytest.mark.asyncio
async def test_logging_lifecycle(options, caplog):
    """Verify that logging occurs at expected levels during the engine lifecycle."""
    caplog.set_level(logging.DEBUG, logger="scrollfeed")
    source = ScriptedPageSource([make_users(3), NetworkFailure("reset"), []])
    engine = PaginationEngine(source, options)

    # 1. Successful page
    await engine.request_next_page()
    assert "Requesting page" in caplog.text  # INFO
    assert "Page loaded" in caplog.text  # INFO

    # Check for context in logs
    has_context = any(
        getattr(record, "page", None) == 1 and getattr(record, "operation", None) == "load"
        for record in caplog.records
    )
    assert has_context, "Log records missing 'page'/'operation' context"

    # 2. Guard rejection while loading
    task = engine.request_next_page()
    engine.request_next_page()
    assert "Ignoring request" in caplog.text  # DEBUG
    await task

    # 3. Failure
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert any(r.getMessage() == "Page request failed" for r in warnings)
    assert any(getattr(r, "error_kind", None) == "network" for r in warnings)

    # 4. Exhaustion
    await engine.request_next_page()
    assert "Collection exhausted" in caplog.text


def test_debounce_logs_redacted_values(fake_loop, caplog):
    """User input must never appear verbatim in log output."""
    caplog.set_level(logging.DEBUG, logger="scrollfeed")
    search = DebounceCoalescer(lambda value: None, delay=500, loop=fake_loop)

    search.notify("secret search text")
    fake_loop.advance_to(500)

    assert "Debounce window restarted" in caplog.text
    assert "Delivering debounced value" in caplog.text
    for record in caplog.records:
        assert "secret search text" not in str(getattr(record, "value", ""))
        assert getattr(record, "value", None) in (None, redact_value("secret search text"))


def test_redact_value():
    assert redact_value("ada@example.com") == redact_value("ada@example.com")
    assert redact_value("ada@example.com") != redact_value("bob@example.com")
    assert len(redact_value("ada@example.com")) == 8
    assert "@" not in redact_value("ada@example.com")


def test_library_logger_has_null_handler():
    logger = logging.getLogger("scrollfeed")
    assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)
