"""
Zillow results page schema.

Site structure (search results, rendered):
- Cards: div with a class containing StyledPropertyCardDataWrapper
- Price: span[data-test=property-card-price]
- Address: address[data-test=property-card-addr]
- Link: a[data-test=property-card-link], usually a site-relative path
- Beds/baths: first and second li of the StyledPropertyCardHomeDetailsList ul

Class names are generated by styled-components and only the stable
prefix is matched.
"""

from typing import List, Optional
from bs4 import BeautifulSoup, Tag

from ..base import PageSchema, FieldKind
from ..config import SiteConfig, get_site_config
from ..utils.extractors import extract_text, extract_attribute, extract_nth_text
from ..utils.normalizers import absolute_url


class ZillowSchema(PageSchema):
    """Card and field selectors for the Zillow search results layout."""

    def __init__(self, config: Optional[SiteConfig] = None):
        self.config = config or get_site_config('zillow')
        self.selectors = self.config.selectors

    def find_cards(self, soup: BeautifulSoup) -> List[Tag]:
        return soup.select(self.selectors['card'])

    def extract_field(self, card: Tag, kind: FieldKind, origin: str) -> Optional[str]:
        if kind is FieldKind.PRICE:
            return extract_text(card, self.selectors['price'])
        if kind is FieldKind.ADDRESS:
            return extract_text(card, self.selectors['address'])
        if kind is FieldKind.LINK:
            return absolute_url(extract_attribute(card, self.selectors['link'], 'href'), origin)
        if kind is FieldKind.BEDS:
            return extract_nth_text(card, self.selectors['details'], 0)
        if kind is FieldKind.BATHS:
            return extract_nth_text(card, self.selectors['details'], 1)
        return None
