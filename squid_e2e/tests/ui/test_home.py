"""Home page tests."""
import re

import pytest
from playwright.async_api import expect

from squid_e2e import selectors
from squid_e2e.browser import browser_session
from squid_e2e.config import settings


pytestmark = [pytest.mark.asyncio, pytest.mark.ui]

MIN_CONTENT_LENGTH = 100
MOBILE_VIEWPORT = {"width": 375, "height": 812}  # iPhone X


class TestHomePage:
    async def test_loads_home_page(self, active_profile):
        async with browser_session() as browser:
            await browser.goto(settings.url("/"))

            await expect(browser.page).to_have_title(re.compile(settings.title_pattern, re.IGNORECASE))

    async def test_displays_main_navigation(self, active_profile):
        async with browser_session() as browser:
            await browser.goto(settings.url("/"))

            await expect(browser.locator(selectors.MAIN_NAVIGATION).first).to_be_visible()

    async def test_displays_main_content_area(self, active_profile):
        async with browser_session() as browser:
            await browser.goto(settings.url("/"))

            await expect(browser.locator(selectors.BODY)).to_be_visible()

            content = await browser.content()
            assert len(content) > MIN_CONTENT_LENGTH, f"Home page looks blank: {content!r}"

    async def test_has_viewport(self, active_profile):
        async with browser_session() as browser:
            await browser.goto(settings.url("/"))

            assert browser.viewport(), "No viewport set on the page"

    async def test_no_console_errors_on_load(self, active_profile):
        async with browser_session() as browser:
            console = browser.watch_console()

            await browser.goto(settings.url("/"))
            # Late scripts may still log after load
            await browser.settle(settings.settle_long)

            critical = console.critical_errors()
            assert not critical, f"Console errors on /: {critical}"

    async def test_renders_at_mobile_viewport(self, active_profile):
        async with browser_session() as browser:
            await browser.set_viewport(MOBILE_VIEWPORT["width"], MOBILE_VIEWPORT["height"])
            await browser.goto(settings.url("/"))

            content = await browser.content()
            assert len(content) > MIN_CONTENT_LENGTH, f"Home page looks blank on mobile: {content!r}"
