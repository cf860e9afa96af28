"""
Site configurations for the target listing site and the search engine
used to reach it.

Each site has a SiteConfig that defines:
- The brand name expected in search result titles
- Pagination suffix and page limit
- CSS selectors for listing cards and their fields
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class SiteConfig:
    """Configuration for a target listing site."""
    name: str                           # Full display name
    short_name: str                     # Identifier used in logger names
    brand: str                          # Substring expected in result titles (case-sensitive)
    page_suffix: str = "{page}_p/"      # Appended to the base URL for page N
    max_pages: int = 4                  # Hard cap on result pages per scrape
    selectors: Dict[str, str] = field(default_factory=dict)  # CSS selectors


@dataclass
class SearchEngineConfig:
    """Configuration for the search engine used to resolve target URLs."""
    name: str
    home_url: str
    input_selectors: List[str]          # Search box candidates, most preferred first
    result_selector: str                # Result heading anchors
    settle_delay_seconds: float = 3.0   # Client-side rendering settle time
    input_timeout_seconds: float = 15.0
    typing_delay_ms: int = 100          # Per-character delay when typing the query

    @property
    def input_selector(self) -> str:
        """Selector matching any search box candidate."""
        return ', '.join(self.input_selectors)


# ============================================================
# SITE CONFIGURATIONS
# ============================================================

SITES = {
    'zillow': SiteConfig(
        name='Zillow',
        short_name='ZILLOW',
        brand='Zillow',
        page_suffix='{page}_p/',
        max_pages=4,
        selectors={
            'card': 'div[class*="StyledPropertyCardDataWrapper"]',
            'price': 'span[data-test="property-card-price"]',
            'address': 'address[data-test="property-card-addr"]',
            'link': 'a[data-test="property-card-link"]',
            'details': 'ul[class*="StyledPropertyCardHomeDetailsList"] li',
        },
    ),
}

SEARCH_ENGINES = {
    'bing': SearchEngineConfig(
        name='Bing',
        home_url='https://www.bing.com/',
        input_selectors=['textarea[name="q"]', 'input[name="q"]'],
        result_selector='h2 > a',
    ),
}

DEFAULT_SITE = 'zillow'
DEFAULT_SEARCH_ENGINE = 'bing'


# ============================================================
# HELPER FUNCTIONS
# ============================================================

def get_site_config(site_key: str = DEFAULT_SITE) -> SiteConfig:
    """
    Get configuration for a site by its key.

    Raises:
        ValueError: If site_key is not found
    """
    if site_key not in SITES:
        valid_keys = ', '.join(sorted(SITES.keys()))
        raise ValueError(f"Unknown site: '{site_key}'. Valid sites: {valid_keys}")
    return SITES[site_key]


def get_search_engine_config(engine_key: str = DEFAULT_SEARCH_ENGINE) -> SearchEngineConfig:
    """
    Get configuration for a search engine by its key.

    Raises:
        ValueError: If engine_key is not found
    """
    if engine_key not in SEARCH_ENGINES:
        valid_keys = ', '.join(sorted(SEARCH_ENGINES.keys()))
        raise ValueError(f"Unknown search engine: '{engine_key}'. Valid engines: {valid_keys}")
    return SEARCH_ENGINES[engine_key]
