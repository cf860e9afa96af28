#!/usr/bin/env python3
"""
Manual test script for the listing scraper.

Runs a live scrape against the real search engine and target site, so it
needs a Playwright Chromium install (playwright install chromium).

Usage:
    cd backend
    python -m scrapers.run_scraper QUERY CITY

Examples:
    python -m scrapers.run_scraper "top home listings" "New York"
    python -m scrapers.run_scraper "homes for sale" Austin --pages 2
    python -m scrapers.run_scraper "homes for sale" Austin --resolve-only
    python -m scrapers.run_scraper --list
"""

import asyncio
import argparse
import logging
import json

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

from scrapers.base import SearchQuery
from scrapers.config import SITES, SEARCH_ENGINES
from scrapers.manager import ScrapeOrchestrator


async def run_resolve_only(orchestrator: ScrapeOrchestrator, query: str, city: str):
    """Test just the search resolution (no pagination)."""
    search = SearchQuery(query=query, city=city)
    print(f"\n{'='*60}")
    print(f"Testing RESOLVE ONLY for: {search.text}")
    print(f"{'='*60}\n")

    async with orchestrator.sessions.session() as session:
        url = await orchestrator.resolver.resolve_target_url(session.page, search.text)

    if url:
        print(f"Target URL: {url}")
    else:
        print("No target link found in search results")


async def run_full_scrape(orchestrator: ScrapeOrchestrator, query: str, city: str, limit: int):
    """Test full scrape (resolve + paginate + extract)."""
    print(f"\n{'='*60}")
    print(f"Testing FULL SCRAPE for: {query} {city} (max {orchestrator.paginator.max_pages} pages)")
    print(f"{'='*60}\n")

    result = await orchestrator.scrape(query, city)

    print(f"Target URL: {result.target_url}")
    print(f"Found {result.total} listings in {result.duration_seconds or 0:.1f}s\n")

    for i, listing in enumerate(result.listings[:limit]):
        print(f"{i+1}. {listing.address}")
        print(f"   Price: {listing.price}")
        print(f"   Beds/Baths: {listing.beds} / {listing.baths}")
        print(f"   URL: {listing.link}")
        missing = listing.missing_fields()
        if missing:
            print(f"   Missing: {', '.join(missing)}")
        print()

    if result.total > limit:
        print(f"... and {result.total - limit} more listings")


def list_sites():
    """List configured target sites and search engines."""
    print(f"\n{'='*60}")
    print("Configured Sites")
    print(f"{'='*60}\n")

    for key, site in SITES.items():
        print(f"🏠 {key:12} - {site.name} (brand '{site.brand}', max {site.max_pages} pages)")

    print()
    for key, engine in SEARCH_ENGINES.items():
        print(f"🔎 {key:12} - {engine.name} ({engine.home_url})")
    print()


async def main():
    parser = argparse.ArgumentParser(description='Test the listing scraper')
    parser.add_argument('query', nargs='?', help='Search query (e.g., "top home listings")')
    parser.add_argument('city', nargs='?', help='City (e.g., "New York")')
    parser.add_argument('--list', action='store_true', help='List configured sites')
    parser.add_argument('--resolve-only', action='store_true', help='Only resolve the target URL')
    parser.add_argument('--pages', type=int, default=None, help='Override max pages')
    parser.add_argument('--headful', action='store_true', help='Show the browser window')
    parser.add_argument('--limit', type=int, default=10, help='Listings to print')
    parser.add_argument('--json', action='store_true', help='Print the full JSON response')

    args = parser.parse_args()

    if args.list:
        list_sites()
        return

    if not args.query or not args.city:
        parser.print_help()
        print('\nExample: python -m scrapers.run_scraper "top home listings" "New York"')
        return

    orchestrator = ScrapeOrchestrator.from_defaults(headless=not args.headful, max_pages=args.pages)

    if args.resolve_only:
        await run_resolve_only(orchestrator, args.query, args.city)
    elif args.json:
        result = await orchestrator.scrape(args.query, args.city)
        print(json.dumps(result.to_dict(), indent=2))
    else:
        await run_full_scrape(orchestrator, args.query, args.city, args.limit)


def cli():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == '__main__':
    cli()
