"""
Direct Playwright Client
========================

Launches Playwright in-process and owns the browser, one context and one
default page. Each UI test opens its own client, so no cookies or storage
leak between tests.

Usage:
    from squid_e2e.playwright_client import PlaywrightClient

    async with PlaywrightClient(base_url="https://shop.example") as client:
        await client.page.goto("/")
"""

from typing import Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from squid_e2e.config import settings


class PlaywrightClient:
    """
    Owns one Playwright browser with a single context and page.

    The context is created with ``base_url`` so tests can navigate with
    site-relative paths ("/catalog") exactly as links on the page do.
    """

    def __init__(
        self,
        browser_type: Optional[str] = None,
        headless: Optional[bool] = None,
        timeout: Optional[int] = None,
        base_url: Optional[str] = None,
    ):
        """
        Args:
            browser_type: chromium, firefox or webkit (None = PLAYWRIGHT_BROWSER)
            headless: Run headless (None = PLAYWRIGHT_HEADLESS)
            timeout: Default action timeout in milliseconds (None = PLAYWRIGHT_TIMEOUT_MS)
            base_url: Base URL for relative navigation
        """
        self.browser_type = browser_type or settings.playwright_browser
        self.headless = settings.playwright_headless if headless is None else headless
        self.timeout = settings.playwright_timeout_ms if timeout is None else timeout
        self.base_url = base_url

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def connect(self):
        """Launch the browser and open the default context and page."""
        self._playwright = await async_playwright().start()

        if self.browser_type == 'firefox':
            self._browser = await self._playwright.firefox.launch(headless=self.headless)
        elif self.browser_type == 'webkit':
            self._browser = await self._playwright.webkit.launch(headless=self.headless)
        else:
            self._browser = await self._playwright.chromium.launch(headless=self.headless)

        self._context = await self.new_context()
        self._page = await self._context.new_page()

    async def new_context(self, **kwargs) -> BrowserContext:
        """
        Create a browser context carrying the client's base URL and timeout.

        Args:
            **kwargs: Extra context options (viewport, user_agent, ...)
        """
        if not self._browser:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")

        if self.base_url:
            kwargs.setdefault("base_url", self.base_url)
        context = await self._browser.new_context(**kwargs)
        context.set_default_timeout(self.timeout)
        return context

    async def close(self):
        """Close page, context, browser and the Playwright driver."""
        if self._page:
            await self._page.close()
            self._page = None

        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    @property
    def browser(self) -> Browser:
        if not self._browser:
            raise RuntimeError("Client not connected")
        return self._browser

    @property
    def context(self) -> BrowserContext:
        if not self._context:
            raise RuntimeError("Client not connected")
        return self._context

    @property
    def page(self) -> Page:
        if not self._page:
            raise RuntimeError("Client not connected or page not created")
        return self._page
