"""
Base classes for the listing scraper system.

This module defines the data structures, error taxonomy and the page
schema interface shared by the crawlers, the site implementations and
the scrape orchestrator.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Optional, Any
from dataclasses import dataclass, field, fields, asdict
from enum import Enum
from datetime import datetime
import logging

logger = logging.getLogger(__name__)

# ANSI color codes for terminal output
class Colors:
    """ANSI color codes for colorized logging."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    # Colors
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GRAY = '\033[90m'

    @staticmethod
    def green(text):
        return f"{Colors.GREEN}{text}{Colors.RESET}"

    @staticmethod
    def yellow(text):
        return f"{Colors.YELLOW}{text}{Colors.RESET}"

    @staticmethod
    def red(text):
        return f"{Colors.RED}{text}{Colors.RESET}"

    @staticmethod
    def blue(text):
        return f"{Colors.BLUE}{text}{Colors.RESET}"

    @staticmethod
    def cyan(text):
        return f"{Colors.CYAN}{text}{Colors.RESET}"

    @staticmethod
    def gray(text):
        return f"{Colors.GRAY}{text}{Colors.RESET}"

    @staticmethod
    def bold(text):
        return f"{Colors.BOLD}{text}{Colors.RESET}"


# ============================================================
# ERRORS
# ============================================================

class ScrapeError(Exception):
    """Base class for every failure surfaced by a scrape operation."""


class ValidationError(ScrapeError):
    """Required request fields are missing."""


class LaunchError(ScrapeError):
    """The browser process could not be started."""


class InputNotFound(ScrapeError):
    """The search engine page never exposed its search input."""


class TargetNotFound(ScrapeError):
    """No search result pointed at the target site."""


class NavigationError(ScrapeError):
    """A page navigation failed or timed out."""


# ============================================================
# DATA MODEL
# ============================================================

class FieldKind(Enum):
    """Fields a page schema can extract from a listing card."""
    PRICE = "price"
    ADDRESS = "address"
    LINK = "link"
    BEDS = "beds"
    BATHS = "baths"


@dataclass(frozen=True)
class Listing:
    """A single property card, as extracted from a rendered results page."""
    price: Optional[str] = None
    address: Optional[str] = None
    link: Optional[str] = None
    beds: Optional[str] = None
    baths: Optional[str] = None

    @classmethod
    def from_fields(cls, values: Dict[FieldKind, Optional[str]]) -> 'Listing':
        return cls(**{kind.value: values.get(kind) for kind in FieldKind})

    def missing_fields(self) -> List[str]:
        return [f.name for f in fields(self) if getattr(self, f.name) is None]

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)


@dataclass(frozen=True)
class SearchQuery:
    """A free-text query and the locality it is scoped to."""
    query: str
    city: str

    @property
    def text(self) -> str:
        """Text submitted to the search engine."""
        return f"{self.query} {self.city}"


@dataclass
class ScrapeResult:
    """Result of a scraping operation."""
    search_query: str
    city: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    target_url: Optional[str] = None
    listings: List[Listing] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.listings)

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.completed_at and self.started_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'searchQuery': self.search_query,
            'city': self.city,
            'listings': [listing.to_dict() for listing in self.listings],
        }


# ============================================================
# PAGE SCHEMA
# ============================================================

class PageSchema(ABC):
    """
    Markup knowledge for one version of a target site's results page.

    Subclasses must implement:
    - find_cards(): Locate the listing card containers
    - extract_field(): Pull one field out of a card

    Selectors live in the schema so that a layout change on the target
    site only touches one class.
    """

    @abstractmethod
    def find_cards(self, soup) -> List[Any]:
        """
        Find every listing card on the page, in document order.

        Args:
            soup: BeautifulSoup of the rendered page

        Returns:
            List of opaque card handles
        """
        pass

    @abstractmethod
    def extract_field(self, card, kind: FieldKind, origin: str) -> Optional[str]:
        """
        Extract one field from a card.

        Args:
            card: Card handle returned by find_cards()
            kind: Which field to extract
            origin: Page origin (scheme://host) for resolving relative links

        Returns:
            Field text, or None when the card does not carry it
        """
        pass
