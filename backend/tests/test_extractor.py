"""
Tests for listing extraction from rendered result pages.
"""

import asyncio

from conftest import FakePage, TARGET_URL, card_html, results_page
from scrapers.base import Listing
from scrapers.extractor import ListingExtractor
from scrapers.sites.zillow import ZillowSchema


def parse(html, url=TARGET_URL):
    return ListingExtractor(ZillowSchema()).parse(html, url)


class TestListingExtractor:
    """Test card-to-record mapping."""

    def test_one_record_per_card(self):
        html = results_page(
            card_html(price="$1", address="1 A St", href="/a/"),
            card_html(price="$2", address="2 B St", href="/b/"),
            card_html(price="$3", address="3 C St", href="/c/"),
        )
        listings = parse(html)

        assert [l.price for l in listings] == ["$1", "$2", "$3"]
        assert [l.address for l in listings] == ["1 A St", "2 B St", "3 C St"]

    def test_empty_card_yields_blank_record(self):
        listings = parse(results_page(card_html()))

        assert listings == [Listing()]
        assert listings[0].missing_fields() == ['price', 'address', 'link', 'beds', 'baths']

    def test_beds_and_baths_by_position(self):
        html = results_page(card_html(price="$750,000", details=("3 bds", "2 ba", "1,400 sqft")))
        listing = parse(html)[0]

        assert listing.beds == "3 bds"
        assert listing.baths == "2 ba"

    def test_single_detail_leaves_baths_absent(self):
        listing = parse(results_page(card_html(details=("Studio",))))[0]

        assert listing.beds == "Studio"
        assert listing.baths is None

    def test_whitespace_text_is_absent(self):
        listing = parse(results_page(card_html(price="   ", address="\n  ")))[0]

        assert listing.price is None
        assert listing.address is None

    def test_text_is_trimmed(self):
        listing = parse(results_page(card_html(price="  $500,000 \n")))[0]
        assert listing.price == "$500,000"

    def test_relative_link_made_absolute(self):
        html = results_page(card_html(address="9 Elm St", href="/homedetails/9-Elm-St/9_zpid/"))
        listing = parse(html, "https://example-target.test/new-york-ny/3_p/")[0]

        assert listing.link == "https://example-target.test/homedetails/9-Elm-St/9_zpid/"

    def test_absolute_link_kept(self):
        href = "https://other.test/homedetails/5_zpid/"
        listing = parse(results_page(card_html(href=href)))[0]
        assert listing.link == href

    def test_blank_href_is_absent(self):
        listing = parse(results_page(card_html(href="  ")))[0]
        assert listing.link is None

    def test_page_without_cards(self):
        assert parse("<html><body><p>Press and hold</p></body></html>") == []

    def test_extract_current_page_reads_dom(self):
        page = FakePage(pages={TARGET_URL: results_page(card_html(price="$1", href="/x/"))})
        asyncio.run(page.goto(TARGET_URL))

        listings = asyncio.run(ListingExtractor(ZillowSchema()).extract_current_page(page))

        assert listings == [Listing(price="$1", link="https://example-target.test/x/")]


class TestListingRecord:
    """Test the Listing record itself."""

    def test_to_dict_has_every_field(self):
        assert Listing(price="$1").to_dict() == {
            "price": "$1", "address": None, "link": None, "beds": None, "baths": None,
        }
