"""
Browser session manager for sites with bot detection.

Uses Playwright with stealth launch settings. Every scrape operation gets
its own browser process and page, and must hand it back through release()
on every exit path.
"""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Dict, Optional
from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright
import logging

from ..base import LaunchError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)

LAUNCH_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-blink-features=AutomationControlled',
    '--disable-dev-shm-usage',
]

# Hides the most common automation indicators
STEALTH_INIT_SCRIPT = """
    Object.defineProperty(navigator, 'webdriver', {
        get: () => undefined
    });
    Object.defineProperty(navigator, 'languages', {
        get: () => ['en-US', 'en']
    });
"""


@dataclass
class Session:
    """One live browser process and its single active page."""
    playwright: Playwright
    browser: Browser
    context: BrowserContext
    page: Page
    closed: bool = False


class BrowserSessionManager:
    """
    Launches and tears down per-request browser sessions.

    Features:
    - Admission limit on concurrently running browsers
    - Default navigation timeout and realistic user agent on every page
    - Idempotent release with per-step close timeouts

    Usage:
        async with manager.session() as session:
            await session.page.goto(url)
    """

    def __init__(
        self,
        headless: bool = True,
        navigation_timeout: float = 60.0,
        max_concurrent_sessions: int = 2,
        user_agent: str = DEFAULT_USER_AGENT,
        close_timeout: float = 2.0,
    ):
        """
        Initialize the session manager.

        Args:
            headless: Run browser in headless mode
            navigation_timeout: Default navigation timeout in seconds
            max_concurrent_sessions: Browsers allowed to run at the same time
            user_agent: User agent string for every page
            close_timeout: Seconds to wait for each close step during release
        """
        self.headless = headless
        self.navigation_timeout = navigation_timeout
        self.max_concurrent_sessions = max_concurrent_sessions
        self.user_agent = user_agent
        self.close_timeout = close_timeout
        self._slots = asyncio.Semaphore(max_concurrent_sessions)
        self._sessions: Dict[int, Session] = {}

    @property
    def active_sessions(self) -> int:
        return len(self._sessions)

    async def acquire(self) -> Session:
        """
        Launch a browser and open one page.

        Waits for a free slot if max_concurrent_sessions browsers are
        already running.

        Raises:
            LaunchError: If the browser process cannot be started
        """
        await self._slots.acquire()
        playwright: Optional[Playwright] = None
        browser: Optional[Browser] = None
        try:
            playwright = await async_playwright().start()
            logger.debug("Launching Chromium browser...")
            browser = await playwright.chromium.launch(
                headless=self.headless,
                args=LAUNCH_ARGS,
                handle_sigint=False,
                handle_sigterm=False,
                handle_sighup=False,
            )
            context = await browser.new_context(
                viewport={'width': 1920, 'height': 1080},
                user_agent=self.user_agent,
                locale='en-US',
            )
            await context.add_init_script(STEALTH_INIT_SCRIPT)
            page = await context.new_page()
            page.set_default_navigation_timeout(self.navigation_timeout * 1000)
        except Exception as e:
            logger.error(f"Failed to launch browser: {e}")
            if browser is not None:
                await self._close_quietly(browser.close(), "browser")
            if playwright is not None:
                await self._close_quietly(playwright.stop(), "playwright")
            self._slots.release()
            raise LaunchError(f"Browser failed to start: {e}") from e

        session = Session(playwright=playwright, browser=browser, context=context, page=page)
        self._sessions[id(session)] = session
        logger.debug(f"Browser session opened ({self.active_sessions} active)")
        return session

    async def release(self, session: Session):
        """
        Terminate the session's browser process and all of its pages.

        Safe to call more than once; only the first call does any work.
        """
        if session.closed:
            return
        session.closed = True
        try:
            await self._close_quietly(session.page.close(), "page")
            await self._close_quietly(session.context.close(), "context")
            await self._close_quietly(session.browser.close(), "browser")
            await self._close_quietly(session.playwright.stop(), "playwright")
        finally:
            self._sessions.pop(id(session), None)
            self._slots.release()
            logger.debug(f"Browser session closed ({self.active_sessions} active)")

    async def release_all(self):
        """Release every session still open (used at shutdown)."""
        for session in list(self._sessions.values()):
            await self.release(session)

    @asynccontextmanager
    async def session(self):
        """Scoped acquire/release."""
        session = await self.acquire()
        try:
            yield session
        finally:
            await self.release(session)

    async def _close_quietly(self, closing, what: str):
        """Await a close coroutine with a timeout, logging instead of raising."""
        try:
            await asyncio.wait_for(closing, timeout=self.close_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"{what.capitalize()} close timed out, forcing cleanup")
        except Exception as e:
            logger.warning(f"Error closing {what}: {e}")
