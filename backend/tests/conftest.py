"""
Pytest configuration and fixtures for Listing Scout tests.

Playwright is replaced by small fakes so no test launches a browser.
"""

import pytest
from fastapi.testclient import TestClient
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from api.main import app, get_orchestrator
from scrapers.base import LaunchError
from scrapers.extractor import ListingExtractor
from scrapers.manager import ScrapeOrchestrator
from scrapers.pagination import PaginationController
from scrapers.sites.zillow import ZillowSchema


TARGET_URL = "https://example-target.test/new-york-ny/"
EMPTY_PAGE = "<html><body><div id='search-page-list-container'></div></body></html>"


# ============================================================
# MARKUP HELPERS
# ============================================================

def card_html(price=None, address=None, href=None, details=()):
    """Build one results card in the Zillow markup."""
    parts = ['<div class="StyledPropertyCardDataWrapper-c11n-8-84-3__sc-hfbvv9-0 abc">']
    if price is not None:
        parts.append(f'<div><span data-test="property-card-price">{price}</span></div>')
    if address is not None:
        parts.append(f'<a data-test="property-card-link" href="{href or ""}"><address data-test="property-card-addr">{address}</address></a>')
    elif href is not None:
        parts.append(f'<a data-test="property-card-link" href="{href}">Details</a>')
    if details:
        items = ''.join(f'<li>{d}</li>' for d in details)
        parts.append(f'<ul class="StyledPropertyCardHomeDetailsList-c11n-8-84-3__sc-1xvdaej-0">{items}</ul>')
    parts.append('</div>')
    return ''.join(parts)


def results_page(*cards):
    """Wrap cards in a results page."""
    return f"<html><body><ul id='grid'>{''.join(f'<li>{c}</li>' for c in cards)}</ul></body></html>"


# ============================================================
# PLAYWRIGHT FAKES
# ============================================================

class FakeResponse:
    def __init__(self, status=200):
        self.status = status


class FakeKeyboard:
    def __init__(self):
        self.pressed = []

    async def press(self, key):
        self.pressed.append(key)


class FakeLocator:
    def __init__(self, page, selector):
        self.page = page
        self.selector = selector

    @property
    def first(self):
        return self

    async def count(self):
        return sum(1 for part in self.selector.split(", ") if part in self.page.inputs)

    async def press_sequentially(self, text, delay=0):
        self.page.typed.append((text, delay))
        self.page.typed_into.append(self.selector)


class FakeNavigation:
    """Stands in for page.expect_navigation(); lands on page.submit_url."""

    def __init__(self, page):
        self.page = page

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is None:
            if self.page.fail_submit:
                raise PlaywrightTimeoutError("Timeout 60000ms exceeded waiting for navigation")
            self.page.navigate_to(self.page.submit_url)
        return False


class FakePage:
    """
    Minimal async Playwright Page.

    Args:
        pages: Mapping of URL to the HTML served there
        scroll_height: Body height, or a callable taking the scrolled distance
        has_input: Whether the search box ever appears
        inputs: Search box selectors present on the page
        fail_urls: URLs whose navigation times out
        submit_url: Where pressing Enter in the search box lands
    """

    def __init__(self, pages=None, scroll_height=500, has_input=True, fail_urls=(),
                 inputs=('textarea[name="q"]', 'input[name="q"]'),
                 submit_url="https://www.bing.com/search?q=test", fail_submit=False):
        self.pages = dict(pages or {})
        self.scroll_height = scroll_height
        self.has_input = has_input
        self.inputs = set(inputs)
        self.fail_urls = set(fail_urls)
        self.submit_url = submit_url
        self.fail_submit = fail_submit
        self.navigations = []
        self.typed = []
        self.typed_into = []
        self.scrolled = 0
        self.scroll_ticks = 0
        self.keyboard = FakeKeyboard()
        self.default_navigation_timeout = None
        self.closed = False
        self._url = "about:blank"

    @property
    def url(self):
        return self._url

    def navigate_to(self, url):
        self._url = url

    async def goto(self, url, wait_until=None, timeout=None):
        self.navigations.append(url)
        if url in self.fail_urls:
            raise PlaywrightTimeoutError(f"Timeout 60000ms exceeded navigating to {url}")
        self._url = url
        return FakeResponse(200)

    async def content(self):
        return self.pages.get(self._url, EMPTY_PAGE)

    async def evaluate(self, script, arg=None):
        if 'scrollBy' in script:
            self.scrolled += arg
            self.scroll_ticks += 1
            return None
        if 'scrollHeight' in script:
            if callable(self.scroll_height):
                return self.scroll_height(self.scrolled)
            return self.scroll_height
        raise AssertionError(f"Unexpected script: {script}")

    async def wait_for_selector(self, selector, timeout=None):
        if not self.has_input:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    def locator(self, selector):
        return FakeLocator(self, selector)

    def expect_navigation(self, wait_until=None, timeout=None):
        return FakeNavigation(self)

    def set_default_navigation_timeout(self, timeout):
        self.default_navigation_timeout = timeout

    async def close(self):
        self.closed = True


class FakeSession:
    def __init__(self, page):
        self.page = page


class FakeSessionManager:
    """Counts acquire/release pairs."""

    def __init__(self, page, fail_launch=False):
        self.page = page
        self.fail_launch = fail_launch
        self.acquired = 0
        self.released = 0

    @property
    def active_sessions(self):
        return self.acquired - self.released

    async def acquire(self):
        if self.fail_launch:
            raise LaunchError("Browser failed to start: executable not found")
        self.acquired += 1
        return FakeSession(self.page)

    async def release(self, session):
        self.released += 1

    async def release_all(self):
        pass


class FakeResolver:
    """Returns a fixed URL and records the queries it was asked for."""

    def __init__(self, url=TARGET_URL):
        self.url = url
        self.calls = []

    async def resolve_target_url(self, page, query_text):
        self.calls.append(query_text)
        return self.url


def build_orchestrator(page, resolver=None, max_pages=4, stop_on_empty=True, fail_launch=False):
    """Orchestrator wired with fakes and instant scrolling."""
    return ScrapeOrchestrator(
        sessions=FakeSessionManager(page, fail_launch=fail_launch),
        resolver=resolver or FakeResolver(),
        paginator=PaginationController(
            max_pages=max_pages,
            stop_on_empty=stop_on_empty,
            scroll_options={'interval': 0},
        ),
        extractor=ListingExtractor(ZillowSchema()),
    )


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def fake_page():
    """A page serving one card on page 1 and nothing after."""
    return FakePage(pages={
        TARGET_URL: results_page(card_html(
            price="$500,000",
            address="123 Main St, New York, NY",
            href="/homedetails/123-Main-St-New-York-NY/1_zpid/",
        )),
    })


@pytest.fixture
def orchestrator(fake_page):
    return build_orchestrator(fake_page)


@pytest.fixture(scope="function")
def client(orchestrator):
    """Create a test client with the orchestrator replaced by fakes."""
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator

    # Use TestClient directly without context manager for compatibility
    test_client = TestClient(app)
    yield test_client

    app.dependency_overrides.clear()

