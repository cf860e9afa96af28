"""Shared utilities for scrapers."""

from .normalizers import (
    normalize_text,
    normalize_base_url,
    build_page_url,
    page_origin,
    absolute_url,
)
from .extractors import (
    extract_text,
    extract_attribute,
    extract_nth_text,
)

__all__ = [
    'normalize_text',
    'normalize_base_url',
    'build_page_url',
    'page_origin',
    'absolute_url',
    'extract_text',
    'extract_attribute',
    'extract_nth_text',
]
