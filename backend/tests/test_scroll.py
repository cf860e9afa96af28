"""
Tests for incremental scrolling.
"""

import asyncio

from conftest import FakePage
from scrapers.crawlers.scroll import auto_scroll


def scroll(page, **options):
    options.setdefault('interval', 0)
    return asyncio.run(auto_scroll(page, **options))


class TestAutoScroll:
    """Test scroll termination."""

    def test_reaches_bottom_of_fixed_page(self):
        page = FakePage(scroll_height=1000)

        assert scroll(page) is True
        assert page.scroll_ticks == 10
        assert page.scrolled == 1000

    def test_short_page_takes_one_tick(self):
        page = FakePage(scroll_height=40)

        assert scroll(page) is True
        assert page.scroll_ticks == 1

    def test_growing_page_extends_scroll(self):
        # Content keeps loading until 2000px
        page = FakePage(scroll_height=lambda scrolled: min(scrolled + 500, 2000))

        assert scroll(page) is True
        assert page.scroll_ticks == 20

    def test_tick_cap_returns_partial(self):
        page = FakePage(scroll_height=lambda scrolled: scrolled + 1000)

        assert scroll(page, max_ticks=25) is False
        assert page.scroll_ticks == 25

    def test_deadline_returns_partial(self):
        page = FakePage(scroll_height=10_000)

        assert scroll(page, deadline=0) is False
        assert page.scroll_ticks == 1

    def test_custom_step(self):
        page = FakePage(scroll_height=1000)

        assert scroll(page, step=250) is True
        assert page.scroll_ticks == 4
