from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from typing import List, Optional, Tuple
from pydantic import BaseModel
import logging
import asyncio
import re

from api.config import settings
from scrapers.base import ValidationError
from scrapers.manager import ScrapeOrchestrator

# Setup logging directory
settings.log_dir.mkdir(exist_ok=True)


# Custom formatter to strip ANSI color codes from file logs
class ColorStripFormatter(logging.Formatter):
    """Formatter that strips ANSI color codes from log messages."""
    ansi_escape = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')

    def format(self, record):
        message = super().format(record)
        return self.ansi_escape.sub('', message)

# Setup logging with color support for console, stripped for file
file_handler = logging.FileHandler(settings.log_file, encoding='utf-8')
file_handler.setFormatter(ColorStripFormatter(settings.log_format))

console_handler = logging.StreamHandler()
console_handler.setFormatter(logging.Formatter(settings.log_format))

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    handlers=[file_handler, console_handler],
    force=True  # Override any existing configuration
)

# Scraper loggers get their own handlers so step logs appear once
scraper_logger = logging.getLogger('scraper')
scraper_logger.propagate = False
# Only add handlers if not already present (prevents duplicates on module reload)
if not scraper_logger.handlers:
    scraper_file_handler = logging.FileHandler(settings.log_file, encoding='utf-8')
    scraper_file_handler.setFormatter(ColorStripFormatter(settings.log_format))
    scraper_logger.addHandler(scraper_file_handler)

    scraper_console_handler = logging.StreamHandler()
    scraper_console_handler.setFormatter(logging.Formatter(settings.log_format))
    scraper_logger.addHandler(scraper_console_handler)
scraper_logger.setLevel(getattr(logging, settings.log_level.upper()))

logger = logging.getLogger(__name__)


# Filter to suppress noisy polling endpoint access logs
class PollingEndpointFilter(logging.Filter):
    # Endpoints that poll frequently and clutter logs
    SUPPRESSED_ENDPOINTS = ['/health']

    def filter(self, record):
        try:
            msg = record.getMessage()
        except Exception:
            msg = str(record.msg)
        for endpoint in self.SUPPRESSED_ENDPOINTS:
            if endpoint in msg:
                return False
        return True

# Apply filter to uvicorn access logger at module load time
uvicorn_access_logger = logging.getLogger("uvicorn.access")
uvicorn_access_logger.addFilter(PollingEndpointFilter())


MISSING_FIELDS_ERROR = 'Please provide both "query" and "city".'

# Built on first use so importing the app never touches Playwright
_orchestrator: Optional[ScrapeOrchestrator] = None


async def get_orchestrator() -> ScrapeOrchestrator:
    """
    Get the process-wide scrape orchestrator.

    Resolved on the event loop, so every request shares one orchestrator
    and its session limit.
    """
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = ScrapeOrchestrator.from_defaults(
            site_key=settings.target_site,
            engine_key=settings.search_engine,
            headless=settings.browser_headless,
            navigation_timeout=settings.navigation_timeout_seconds,
            max_concurrent_sessions=settings.max_concurrent_sessions,
            max_pages=settings.max_pages,
            stop_on_empty=settings.stop_on_empty_page,
            navigation_retries=settings.navigation_retries,
            scroll_options={
                'max_ticks': settings.scroll_max_ticks,
                'deadline': settings.scroll_deadline_seconds,
            },
        )
    return _orchestrator


async def cleanup_resources():
    """Close any browser sessions still open."""
    if _orchestrator is None:
        return
    logger.info("Closing browser sessions...")
    await _orchestrator.sessions.release_all()
    logger.info("Browser sessions closed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info("=" * 60)
    logger.info("Listing Scout Backend Starting Up")
    logger.info("=" * 60)
    logger.info(f"Log file: {settings.log_file}")
    logger.info(f"Port: {settings.api_port}")
    logger.info(f"Target site: {settings.target_site} via {settings.search_engine} (max {settings.max_pages} pages)")
    logger.info("Backend ready to accept requests")

    yield  # Application runs here

    # Shutdown
    logger.info("=" * 60)
    logger.info("Listing Scout Backend Shutting Down")
    logger.info("=" * 60)

    try:
        await asyncio.wait_for(cleanup_resources(), timeout=10.0)
    except asyncio.TimeoutError:
        logger.warning("Shutdown cleanup timed out, forcing exit")
    except Exception as e:
        logger.error(f"Error during shutdown cleanup: {e}")

    logger.info("Shutdown complete")


app = FastAPI(
    title="Listing Scout API",
    version="1.0.0",
    lifespan=lifespan
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same answer as missing fields."""
    logger.warning(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": MISSING_FIELDS_ERROR})


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    """Return empty response for favicon requests"""
    return Response(status_code=204)


# Pydantic models for API requests and responses
class ScrapeRequest(BaseModel):
    query: Optional[str] = None
    city: Optional[str] = None


class ListingResponse(BaseModel):
    price: Optional[str]
    address: Optional[str]
    link: Optional[str]
    beds: Optional[str]
    baths: Optional[str]


class ScrapeResponse(BaseModel):
    searchQuery: str
    city: str
    listings: List[ListingResponse]


class ErrorResponse(BaseModel):
    error: str


def validate_scrape_request(payload: ScrapeRequest) -> Tuple[str, str]:
    """
    Check that both query and city are present and non-empty.

    Raises:
        ValidationError: If either field is missing
    """
    if not payload.query or not payload.city:
        raise ValidationError(MISSING_FIELDS_ERROR)
    return payload.query, payload.city


# API Endpoints

@app.get("/")
async def root():
    return {"message": "Listing Scout API", "version": "1.0.0"}


@app.get("/health")
async def health(orchestrator: ScrapeOrchestrator = Depends(get_orchestrator)):
    return {"status": "ok", "active_sessions": orchestrator.sessions.active_sessions}


@app.post(
    "/scrape",
    response_model=ScrapeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def scrape_listings(
    payload: ScrapeRequest,
    orchestrator: ScrapeOrchestrator = Depends(get_orchestrator)
):
    """Resolve the listing page for query + city and scrape its listings"""
    logger.info("Received scrape request...")
    try:
        query, city = validate_scrape_request(payload)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    try:
        result = await orchestrator.scrape(query, city)
    except Exception as e:
        logger.error(f"Scraping error: {e}")
        return JSONResponse(status_code=500, content={"error": f"{type(e).__name__}: {e}"})

    return result.to_dict()


def run():
    """Start the API server on the configured port."""
    import uvicorn

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        access_log=True,
        log_config=None,  # Keep the handlers configured above
        timeout_keep_alive=5,
        timeout_graceful_shutdown=10.0,
    )


if __name__ == "__main__":
    run()
