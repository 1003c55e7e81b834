"""
Debounced search box.

Keystrokes arrive every 80ms; the query only runs once typing has been quiet
for half a second, and only for the final text.
"""

import asyncio
import logging

from scrollfeed import DebounceCoalescer, FeedOptions

logger = logging.getLogger("debounced_search")


async def search(text: str) -> None:
    logger.info("Search value: %s", text)
    await asyncio.sleep(0.1)  # stand-in for the real query


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    options = FeedOptions()

    with DebounceCoalescer(search, delay=options.debounce_delay) as debounced:
        typed = ""
        for char in "lovelace":
            typed += char
            debounced.notify(typed)
            await asyncio.sleep(0.08)

        await asyncio.sleep(options.debounce_delay + 0.2)


if __name__ == "__main__":
    asyncio.run(main())
