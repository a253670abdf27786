"""Thin wrapper around direct Playwright for ergonomic UI tests."""
from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, List, Optional

import anyio
from playwright.async_api import Locator, Page, TimeoutError as PlaywrightTimeout

from squid_e2e.config import settings
from squid_e2e.console import ConsoleErrorCollector
from squid_e2e.playwright_client import PlaywrightClient


@dataclass
class ToolError(Exception):
    """Raised when a browser operation fails (timeout, crash, detached page)."""

    name: str
    payload: Dict[str, Any]
    message: str

    def __str__(self) -> str:  # pragma: no cover - human readable helper
        return f"{self.name} failed ({self.message}) with payload={self.payload}"


class Browser:
    """Convenience wrapper over one Playwright page."""

    def __init__(self, page: Page) -> None:
        self._page = page
        self.current_url: str | None = None
        self.current_title: str | None = None

    @property
    def page(self) -> Page:
        return self._page

    @property
    def url(self) -> str:
        return self._page.url

    async def _update_state(self) -> None:
        self.current_url = self._page.url
        self.current_title = await self._page.title()

    async def goto(self, url: str, wait_until: str = "load", timeout: int | None = None) -> Dict[str, Any]:
        """Navigate to URL and return url, title and HTTP status.

        ``status`` is None when the navigation produced no response, e.g. a
        same-document hash change.
        """
        try:
            response = await self._page.goto(url, wait_until=wait_until, timeout=timeout)
        except PlaywrightTimeout as exc:
            raise ToolError(name="goto", payload={"url": url, "wait_until": wait_until}, message=str(exc))
        await self._update_state()
        return {"url": self.current_url, "title": self.current_title, "status": response.status if response else None}

    async def settle(self, seconds: float) -> None:
        """Give asynchronous UI updates time to land."""
        await anyio.sleep(seconds)

    def locator(self, selector: str) -> Locator:
        return self._page.locator(selector)

    async def count(self, selector: str) -> int:
        try:
            return await self._page.locator(selector).count()
        except Exception as exc:
            raise ToolError(name="count", payload={"selector": selector}, message=str(exc))

    async def has(self, selector: str) -> bool:
        """Whether at least one element matches, visible or not."""
        return await self.count(selector) > 0

    async def is_visible(self, selector: str) -> bool:
        """Whether the first match is visible. False when nothing matches."""
        try:
            return await self._page.locator(selector).first.is_visible()
        except Exception as exc:
            raise ToolError(name="is_visible", payload={"selector": selector}, message=str(exc))

    async def click_first(self, selector: str, wait_until: str = "load") -> Dict[str, Any]:
        """Click the first match and wait for the resulting page to load."""
        try:
            await self._page.locator(selector).first.click()
            await self._page.wait_for_load_state(wait_until)
        except Exception as exc:
            raise ToolError(name="click", payload={"selector": selector}, message=str(exc))
        await self._update_state()
        return {"selector": selector, "url": self.current_url}

    async def click_or_goto(self, selector: str, fallback_url: str) -> bool:
        """Click ``selector`` if it is visible, otherwise navigate to ``fallback_url``.

        Returns True when the click path was taken. Tests use this instead
        of assuming a particular page layout.
        """
        if await self.is_visible(selector):
            await self.click_first(selector)
            return True
        await self.goto(fallback_url)
        return False

    async def go_back(self, wait_until: str = "load") -> Dict[str, Any]:
        try:
            await self._page.go_back(wait_until=wait_until)
        except PlaywrightTimeout as exc:
            raise ToolError(name="go_back", payload={"wait_until": wait_until}, message=str(exc))
        await self._update_state()
        return {"url": self.current_url}

    async def scroll_to_bottom(self) -> None:
        await self.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")

    async def cookies(self) -> List[Dict[str, Any]]:
        return list(await self._page.context.cookies())

    async def content(self) -> str:
        try:
            return await self._page.content()
        except Exception as exc:
            raise ToolError(name="content", payload={}, message=str(exc))

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        """Execute JavaScript in the page context."""
        try:
            return await self._page.evaluate(script, arg)
        except Exception as exc:
            raise ToolError(name="evaluate", payload={"script": script}, message=str(exc))

    def viewport(self) -> Optional[Dict[str, int]]:
        return self._page.viewport_size

    async def set_viewport(self, width: int, height: int) -> None:
        await self._page.set_viewport_size({"width": width, "height": height})

    def watch_console(self) -> ConsoleErrorCollector:
        """Start collecting console errors from this page."""
        return ConsoleErrorCollector().attach(self._page)


@asynccontextmanager
async def browser_session(base_url: str | None = None) -> AsyncIterator[Browser]:
    """Yield a Browser on a fresh Playwright instance for the active profile.

    The page starts with an empty history, so the first ``goto`` is the
    oldest entry ``go_back`` can reach.
    """
    async with PlaywrightClient(base_url=base_url or settings.base_url) as client:
        yield Browser(client.page)
