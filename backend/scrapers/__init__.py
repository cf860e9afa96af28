"""
Playwright-based listing scraper for Listing Scout.

This module provides the search-resolve-paginate-extract pipeline:
- Search resolution through a search engine (Bing)
- Browser-driven pagination with lazy-load scrolling
- Schema-based card extraction (Zillow results layout)
"""

from .base import (
    Listing,
    SearchQuery,
    ScrapeResult,
    ScrapeError,
    ValidationError,
    LaunchError,
    InputNotFound,
    TargetNotFound,
    NavigationError,
)
from .config import SITES, get_site_config, get_search_engine_config
from .manager import ScrapeOrchestrator

__all__ = [
    'Listing',
    'SearchQuery',
    'ScrapeResult',
    'ScrapeError',
    'ValidationError',
    'LaunchError',
    'InputNotFound',
    'TargetNotFound',
    'NavigationError',
    'SITES',
    'get_site_config',
    'get_search_engine_config',
    'ScrapeOrchestrator',
]
