"""
Infinite scroll against the public randomuser.me API.

A fake viewport scrolls down 200 units at a time; whenever the bottom of the
viewport gets within the scroll buffer of the rendered content, the engine
loads the next page.
"""

import asyncio
import logging

from scrollfeed import CursorState, FeedOptions, HttpPageSource, PaginationEngine, User

ROW_HEIGHT = 72
VIEWPORT = 640


def render_status(state: CursorState) -> None:
    if state.is_loading:
        print(f"  loading page {state.current_page}...")
    elif state.last_error is not None:
        print(f"  failed to load data ({state.last_error.value}); scroll to retry")
    elif state.is_exhausted:
        print("  no more data available")


async def main() -> None:
    logging.basicConfig(level=logging.INFO)

    source = HttpPageSource(item_model=User)
    async with PaginationEngine(source, FeedOptions(page_size=10)) as engine:
        engine.add_listener(render_status)

        # Initial load on mount
        await engine.request_next_page()

        offset = 0
        for _ in range(20):
            content = len(engine.items) * ROW_HEIGHT
            offset = min(offset + 200, max(content - VIEWPORT, 0))
            engine.on_scroll(offset, VIEWPORT, content)
            await engine.wait()

        for user in engine.items:
            print(f"{user.display_name:<30} {user.email}")


if __name__ == "__main__":
    asyncio.run(main())
