"""
Data extraction utilities for scrapers.

These functions read text and attributes out of BeautifulSoup elements.
Every helper returns None instead of raising when the element is missing.
"""

from typing import Optional
from bs4 import Tag

from .normalizers import normalize_text


def extract_text(element: Tag, selector: str) -> Optional[str]:
    """
    Extract the trimmed text of the first element matching selector.

    Args:
        element: Element to search under
        selector: CSS selector

    Returns:
        Text, or None if nothing matches or the text is blank
    """
    match = element.select_one(selector)
    if match is None:
        return None
    return normalize_text(match.get_text())


def extract_attribute(element: Tag, selector: str, attribute: str) -> Optional[str]:
    """
    Extract an attribute of the first element matching selector.

    Args:
        element: Element to search under
        selector: CSS selector
        attribute: Attribute name (e.g., 'href')

    Returns:
        Attribute value, or None if nothing matches or the value is blank
    """
    match = element.select_one(selector)
    if match is None:
        return None
    value = match.get(attribute)
    if isinstance(value, list):
        value = ' '.join(value)
    return normalize_text(value)


def extract_nth_text(element: Tag, selector: str, index: int) -> Optional[str]:
    """
    Extract the trimmed text of the Nth element matching selector.

    Returns None when fewer than index + 1 elements match.
    """
    matches = element.select(selector)
    if len(matches) <= index:
        return None
    return normalize_text(matches[index].get_text())
