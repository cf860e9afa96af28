"""
Scrape Orchestrator - runs one search-resolve-paginate-extract operation.

Composes the browser session manager, search resolver, pagination
controller and listing extractor. Owns the session for the duration of
one scrape and always releases it, whatever happens in between.
"""

from datetime import datetime, timezone
from typing import Optional
import logging

from .base import ScrapeResult, SearchQuery, TargetNotFound, Colors
from .config import get_site_config, get_search_engine_config
from .crawlers.navigation import goto
from .crawlers.session import BrowserSessionManager
from .extractor import ListingExtractor
from .pagination import PaginationController
from .sites.bing import BingResolver
from .sites.zillow import ZillowSchema

logger = logging.getLogger(__name__)


class ScrapeOrchestrator:
    """
    Runs scrape operations end to end.

    Usage:
        orchestrator = ScrapeOrchestrator.from_defaults()
        result = await orchestrator.scrape("top home listings", "New York")
        payload = result.to_dict()

    Concurrent scrape() calls are independent; each acquires its own
    browser session, bounded by the session manager's admission limit.
    """

    def __init__(
        self,
        sessions,
        resolver,
        paginator: PaginationController,
        extractor: ListingExtractor,
        navigation_retries: int = 0,
    ):
        """
        Initialize the orchestrator.

        Args:
            sessions: Session manager with acquire()/release()
            resolver: Search resolver with resolve_target_url()
            paginator: Pagination controller
            extractor: Listing extractor for the target site
            navigation_retries: Extra attempts for the initial target navigation
        """
        self.sessions = sessions
        self.resolver = resolver
        self.paginator = paginator
        self.extractor = extractor
        self.navigation_retries = navigation_retries
        self.logger = logging.getLogger("scraper.orchestrator")

    @classmethod
    def from_defaults(
        cls,
        site_key: str = 'zillow',
        engine_key: str = 'bing',
        headless: bool = True,
        navigation_timeout: float = 60.0,
        max_concurrent_sessions: int = 2,
        max_pages: Optional[int] = None,
        stop_on_empty: bool = True,
        navigation_retries: int = 0,
        scroll_options: Optional[dict] = None,
    ) -> 'ScrapeOrchestrator':
        """Build an orchestrator wired to the configured site and search engine."""
        site = get_site_config(site_key)
        engine = get_search_engine_config(engine_key)

        return cls(
            sessions=BrowserSessionManager(
                headless=headless,
                navigation_timeout=navigation_timeout,
                max_concurrent_sessions=max_concurrent_sessions,
            ),
            resolver=BingResolver(site.brand, engine, navigation_retries=navigation_retries),
            paginator=PaginationController(
                max_pages=site.max_pages if max_pages is None else max_pages,
                stop_on_empty=stop_on_empty,
                page_suffix=site.page_suffix,
                navigation_retries=navigation_retries,
                scroll_options=scroll_options,
                logger_name=f"scraper.{site.short_name}",
            ),
            extractor=ListingExtractor(ZillowSchema(site), logger_name=f"scraper.{site.short_name}"),
            navigation_retries=navigation_retries,
        )

    async def scrape(self, query: str, city: str) -> ScrapeResult:
        """
        Resolve the target page for query + city and extract its listings.

        Args:
            query: Free-text search query
            city: Locality appended to the query

        Returns:
            ScrapeResult tagged with the requested query and city

        Raises:
            LaunchError: If no browser could be started
            InputNotFound: If the search engine showed no search box
            TargetNotFound: If no search result named the target site
            NavigationError: If any navigation failed
        """
        search = SearchQuery(query=query, city=city)
        result = ScrapeResult(
            search_query=query,
            city=city,
            started_at=datetime.now(timezone.utc),
        )
        self.logger.info(f"Starting scrape for {Colors.bold(search.text)}")

        session = await self.sessions.acquire()
        try:
            target_url = await self.resolver.resolve_target_url(session.page, search.text)
            if not target_url:
                raise TargetNotFound(f"No target link found in search results for '{search.text}'")
            result.target_url = target_url
            self.logger.info(f"Found target URL: {target_url}")

            await goto(session.page, target_url, retries=self.navigation_retries)
            result.listings = await self.paginator.collect_pages(session.page, target_url, self.extractor)
        except Exception as e:
            self.logger.error(f"{Colors.red('[ERR]')} Scrape failed for '{search.text}': {e}")
            raise
        finally:
            await self.sessions.release(session)

        result.completed_at = datetime.now(timezone.utc)
        duration = result.duration_seconds or 0
        self.logger.info(f"✅ Scrape complete in {duration:.1f}s: {result.total} listings")
        return result
