"""
Listing extraction from the currently rendered page.

The extractor never navigates or waits. It snapshots the page HTML,
hands it to a PageSchema and emits exactly one Listing per card.
"""

from typing import List
from bs4 import BeautifulSoup
from playwright.async_api import Page
import logging

from .base import Listing, FieldKind, PageSchema, Colors
from .utils.normalizers import page_origin


class ListingExtractor:
    """
    Turns rendered result pages into Listing records.

    A card with no extractable fields still yields a Listing with every
    field set to None, so records map 1:1 to cards on the page.
    """

    def __init__(self, schema: PageSchema, logger_name: str = "scraper.extractor"):
        self.schema = schema
        self.logger = logging.getLogger(logger_name)

    async def extract_current_page(self, page: Page) -> List[Listing]:
        """
        Extract every listing card from the page's current DOM.

        Args:
            page: Playwright page, already scrolled

        Returns:
            Listings in document order
        """
        html = await page.content()
        return self.parse(html, page.url)

    def parse(self, html: str, url: str) -> List[Listing]:
        """Parse page HTML fetched from url."""
        soup = BeautifulSoup(html, 'html.parser')
        origin = page_origin(url)

        listings = []
        for card in self.schema.find_cards(soup):
            values = {kind: self.schema.extract_field(card, kind, origin) for kind in FieldKind}
            listings.append(Listing.from_fields(values))

        self.log_extraction(listings)
        return listings

    def log_extraction(self, listings: List[Listing]):
        """
        Log how many records carry each field.

        Args:
            listings: Records extracted from one page
        """
        if not listings:
            self.logger.info(f"   ✘ {Colors.yellow('no listing cards found')}")
            return

        total = len(listings)
        coverage = []
        for kind in FieldKind:
            present = sum(1 for listing in listings if getattr(listing, kind.value) is not None)
            coverage.append(f"{kind.value} {present}/{total}")
        self.logger.info(f"   ➤ {total} cards: {', '.join(coverage)}")
