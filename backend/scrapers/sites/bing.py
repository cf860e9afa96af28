"""
Bing search resolver.

The target site blocks direct entry, so the results page URL is found
through a search engine. The resolver types the query like a person
would and picks the first result heading that names the target brand.

Site structure:
- Home page: textarea[name=q] (older layouts use input[name=q])
- Results page: result titles are h2 > a, in ranking order
"""

import asyncio
from typing import Optional
from bs4 import BeautifulSoup
from playwright.async_api import Error as PlaywrightError, Locator, Page, TimeoutError as PlaywrightTimeoutError
import logging

from ..base import InputNotFound, NavigationError
from ..config import SearchEngineConfig, get_search_engine_config
from ..crawlers.navigation import goto


class BingResolver:
    """
    Resolves a free-text query to a target site URL via Bing.

    This is best-effort: ranking and markup belong to the search engine,
    so the first matching result is returned without further checks.
    """

    def __init__(self, brand: str, config: Optional[SearchEngineConfig] = None, navigation_retries: int = 0):
        """
        Initialize the resolver.

        Args:
            brand: Case-sensitive text a result title must contain
            config: Search engine configuration (defaults to Bing)
            navigation_retries: Extra attempts for the home page navigation
        """
        self.brand = brand
        self.config = config or get_search_engine_config('bing')
        self.navigation_retries = navigation_retries
        self.logger = logging.getLogger(f"scraper.{self.config.name.lower()}")

    async def resolve_target_url(self, page: Page, query_text: str) -> Optional[str]:
        """
        Search for query_text and return the first result link naming the brand.

        Args:
            page: Playwright page owned by the caller
            query_text: Text to type into the search box

        Returns:
            The result's href, or None if no result names the brand

        Raises:
            InputNotFound: If the search box never appears
            NavigationError: If loading the home page or the results fails
        """
        self.logger.info(f"Navigating to {self.config.name}...")
        await goto(page, self.config.home_url, retries=self.navigation_retries)

        await asyncio.sleep(self.config.settle_delay_seconds)

        try:
            await page.wait_for_selector(
                self.config.input_selector,
                timeout=self.config.input_timeout_seconds * 1000,
            )
        except PlaywrightTimeoutError as e:
            raise InputNotFound(
                f"Search box not found on {self.config.name} after {self.config.input_timeout_seconds:g}s"
            ) from e

        self.logger.info(f"Searching for: {query_text}")
        search_box = await self.find_search_box(page)
        await search_box.press_sequentially(query_text, delay=self.config.typing_delay_ms)

        try:
            async with page.expect_navigation(wait_until='domcontentloaded'):
                await page.keyboard.press('Enter')
        except PlaywrightError as e:
            raise NavigationError(f"Search results did not load: {e}") from e

        html = await page.content()
        return self.find_brand_link(html)

    async def find_search_box(self, page: Page) -> Locator:
        """
        Pick the search box, trying candidates in preference order.

        Newer layouts render a textarea; an input is used only when no
        textarea exists.
        """
        for selector in self.config.input_selectors:
            locator = page.locator(selector)
            if await locator.count() > 0:
                return locator.first
        return page.locator(self.config.input_selector).first

    def find_brand_link(self, html: str) -> Optional[str]:
        """
        Return the href of the first result heading containing the brand.

        Args:
            html: Search results page HTML

        Returns:
            Raw href, or None when no heading matches
        """
        soup = BeautifulSoup(html, 'html.parser')
        for anchor in soup.select(self.config.result_selector):
            if self.brand in anchor.get_text():
                href = anchor.get('href')
                self.logger.info(f"Found {self.brand} result: {href}")
                return href

        self.logger.warning(f"No {self.brand} result among search results")
        return None
