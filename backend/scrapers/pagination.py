"""
Pagination across a bounded number of result pages.
"""

from typing import List, Optional
from playwright.async_api import Page
import logging

from .base import Listing, NavigationError, Colors
from .crawlers.navigation import goto
from .crawlers.scroll import auto_scroll
from .extractor import ListingExtractor
from .utils.normalizers import build_page_url


class PaginationController:
    """
    Walks result pages 1..max_pages on one browser page.

    For each page: scroll to load lazy cards, extract, then navigate to
    the next page. The caller has already navigated to page 1.

    Stops early when a page yields no cards and stop_on_empty is set.
    A failed navigation is not caught here; listings collected so far
    are dropped with the operation.
    """

    def __init__(
        self,
        max_pages: int = 4,
        stop_on_empty: bool = True,
        page_suffix: str = "{page}_p/",
        navigation_retries: int = 0,
        scroll_options: Optional[dict] = None,
        logger_name: str = "scraper.pagination",
    ):
        """
        Initialize the controller.

        Args:
            max_pages: Highest page number to visit
            stop_on_empty: Treat a page with zero cards as the end of results
            page_suffix: Format string for page N, appended to the base URL
            navigation_retries: Extra attempts per page navigation
            scroll_options: Keyword arguments passed to auto_scroll()
            logger_name: Logger to report progress on

        Raises:
            ValueError: If max_pages is below 1
        """
        if max_pages < 1:
            raise ValueError(f"max_pages must be at least 1, got {max_pages}")
        self.max_pages = max_pages
        self.stop_on_empty = stop_on_empty
        self.page_suffix = page_suffix
        self.navigation_retries = navigation_retries
        self.scroll_options = scroll_options or {}
        self.logger = logging.getLogger(logger_name)

    async def collect_pages(self, page: Page, base_url: str, extractor: ListingExtractor) -> List[Listing]:
        """
        Extract listings from every result page, in page order.

        Args:
            page: Playwright page showing result page 1
            base_url: URL of result page 1
            extractor: Listing extractor for the current page

        Returns:
            Concatenation of per-page listings

        Raises:
            NavigationError: If moving to a later page fails
        """
        listings: List[Listing] = []
        cursor = 1
        pages_scraped = 0

        while cursor <= self.max_pages:
            self.logger.info(f"\n{Colors.cyan('❯❯❯')}")
            self.logger.info(f"{Colors.bold(f'[{cursor}/{self.max_pages}]')} Scraping page {cursor} {Colors.gray(f'({page.url})')}")

            await auto_scroll(page, **self.scroll_options)
            page_listings = await extractor.extract_current_page(page)
            listings.extend(page_listings)
            pages_scraped = cursor

            if not page_listings and self.stop_on_empty:
                self.logger.info(f"Page {cursor} is empty, stopping pagination")
                break
            if cursor >= self.max_pages:
                break

            cursor += 1
            next_url = build_page_url(base_url, cursor, self.page_suffix)
            self.logger.info(f"Navigating to next page: {next_url}")
            try:
                await goto(page, next_url, retries=self.navigation_retries)
            except NavigationError:
                self.logger.error(f"Pagination failed at page {cursor}, discarding {len(listings)} collected listings")
                raise

        self.logger.info(f"Finished extracting listings: {len(listings)} from {pages_scraped} page(s)")
        return listings
