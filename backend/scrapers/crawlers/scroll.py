"""
Incremental scrolling to force lazy-loaded listing cards to render.
"""

import asyncio
import time
from typing import Optional
from playwright.async_api import Page
import logging

logger = logging.getLogger(__name__)

SCROLL_BY_JS = "(distance) => window.scrollBy(0, distance)"
SCROLL_HEIGHT_JS = "() => document.body.scrollHeight"


async def auto_scroll(
    page: Page,
    step: int = 100,
    interval: float = 0.3,
    max_ticks: int = 400,
    deadline: Optional[float] = 90.0,
) -> bool:
    """
    Scroll down in fixed steps until the scrolled distance reaches the
    page height.

    Height is re-read on every tick, so content that loads while
    scrolling extends the loop.

    Args:
        page: Playwright page
        step: Pixels per tick
        interval: Seconds between ticks
        max_ticks: Upper bound on ticks
        deadline: Wall-clock budget in seconds (None for no budget)

    Returns:
        True if the bottom was reached, False on a partial load (a bound
        was hit first)
    """
    started = time.monotonic()
    scrolled = 0

    for tick in range(1, max_ticks + 1):
        await page.evaluate(SCROLL_BY_JS, step)
        scrolled += step
        height = await page.evaluate(SCROLL_HEIGHT_JS)
        if scrolled >= (height or 0):
            logger.debug(f"Reached bottom after {tick} ticks ({scrolled}px)")
            return True
        if deadline is not None and time.monotonic() - started >= deadline:
            logger.warning(f"Scroll deadline of {deadline}s hit at {scrolled}/{height}px, continuing with partial load")
            return False
        await asyncio.sleep(interval)

    logger.warning(f"Scroll stopped after {max_ticks} ticks at {scrolled}px, continuing with partial load")
    return False
