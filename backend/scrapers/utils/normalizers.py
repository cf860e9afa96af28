"""
Data normalization utilities for scrapers.

These functions standardize scraped text and URLs into consistent formats.
"""

from typing import Optional
from urllib.parse import urljoin, urlparse, urlunparse


def normalize_text(text: Optional[str]) -> Optional[str]:
    """
    Trim element text, treating blank text as absent.

    Examples:
        "  $500,000 " -> "$500,000"
        "   " -> None
        None -> None
    """
    if text is None:
        return None
    text = text.strip()
    return text or None


def normalize_base_url(url: str) -> str:
    """
    Normalize a results URL so that page suffixes can be appended.

    Drops query string and fragment, and leaves exactly one trailing slash.

    Examples:
        https://x.test/new-york-ny -> https://x.test/new-york-ny/
        https://x.test/new-york-ny// -> https://x.test/new-york-ny/
        https://x.test/new-york-ny/?src=bing -> https://x.test/new-york-ny/
    """
    parsed = urlparse(url.strip())
    path = parsed.path.rstrip('/') + '/'
    return urlunparse((parsed.scheme, parsed.netloc, path, '', '', ''))


def build_page_url(base_url: str, page: int, suffix: str = "{page}_p/") -> str:
    """
    Build the URL of result page N.

    Examples:
        (https://x.test/new-york-ny/, 2) -> https://x.test/new-york-ny/2_p/
    """
    return normalize_base_url(base_url) + suffix.format(page=page)


def page_origin(url: str) -> str:
    """
    Get the origin (scheme://host[:port]) of a URL.

    Examples:
        https://x.test/new-york-ny/2_p/ -> https://x.test
    """
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def absolute_url(href: Optional[str], origin: str) -> Optional[str]:
    """
    Resolve an href against a page origin.

    Absolute hrefs are returned unchanged; blank hrefs are absent.
    """
    href = normalize_text(href)
    if href is None:
        return None
    return urljoin(origin, href)
