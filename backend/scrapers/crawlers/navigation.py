"""
Page navigation with a single failure type.

Every navigation in a scrape (search engine home, target page, later
result pages) goes through goto() so that Playwright timeouts and
network errors surface as NavigationError.
"""

import asyncio
from typing import Optional
from playwright.async_api import Error as PlaywrightError, Page
import logging

from ..base import NavigationError

logger = logging.getLogger(__name__)


async def goto(
    page: Page,
    url: str,
    wait_until: str = 'domcontentloaded',
    timeout: Optional[float] = None,
    retries: int = 0,
):
    """
    Navigate a page and wait for the given load state.

    Args:
        page: Playwright page
        url: Destination URL
        wait_until: Load state to wait for
        timeout: Navigation timeout in seconds (page default when None)
        retries: Extra attempts after the first failure

    Returns:
        Playwright Response (may be None for same-document navigations)

    Raises:
        NavigationError: If every attempt fails or times out
    """
    kwargs = {'wait_until': wait_until}
    if timeout is not None:
        kwargs['timeout'] = int(timeout * 1000)

    last_error = None
    attempts = retries + 1
    for attempt in range(attempts):
        try:
            response = await page.goto(url, **kwargs)
            if response is not None and response.status >= 400:
                # Bot walls often answer 403 with a rendered page; let extraction decide
                logger.warning(f"HTTP {response.status} for {url}")
            return response
        except PlaywrightError as e:
            last_error = e
            logger.warning(f"Attempt {attempt + 1}/{attempts} failed for {url}: {e}")
            if attempt < attempts - 1:
                await asyncio.sleep(min(1.5 ** attempt, 3))

    raise NavigationError(f"Navigation to {url} failed: {last_error}") from last_error
