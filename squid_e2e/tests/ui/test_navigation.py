"""Navigation and routing tests."""
import pytest

from squid_e2e import selectors
from squid_e2e.browser import browser_session
from squid_e2e.config import settings


pytestmark = [pytest.mark.asyncio, pytest.mark.ui]

MISSING_PATH = "/this-page-does-not-exist-12345"


class TestNavigation:
    async def test_has_links(self, active_profile, observations):
        async with browser_session() as browser:
            await browser.goto(settings.url("/"))

            observations.note("Links on home page", await browser.count(selectors.ANY_LINK))

    async def test_browser_back_returns_home(self, active_profile):
        async with browser_session() as browser:
            await browser.goto(settings.url("/"))
            home_url = browser.url

            if not await browser.has(selectors.ANY_LINK):
                pytest.skip("Home page has no links to follow")

            await browser.click_first(selectors.ANY_LINK)
            await browser.go_back()

            assert browser.url == home_url, f"Back navigation landed on {browser.url}, expected {home_url}"

    async def test_handles_missing_page(self, active_profile):
        """The server answers unknown paths, with a 404 page or a redirect."""
        async with browser_session() as browser:
            nav = await browser.goto(settings.url(MISSING_PATH))

            assert nav["status"] is not None, f"No response for {MISSING_PATH}"
            assert nav["status"] >= 200, f"Unexpected status {nav['status']} for {MISSING_PATH}"

    async def test_has_footer(self, active_profile, observations):
        async with browser_session() as browser:
            await browser.goto(settings.url("/"))
            await browser.scroll_to_bottom()

            observations.note("Footer present", await browser.has(selectors.FOOTER))

    async def test_keeps_session_across_navigation(self, active_profile):
        async with browser_session() as browser:
            await browser.goto(settings.url("/"))
            initial_cookies = await browser.cookies()

            if not await browser.has(selectors.SITE_LINK):
                pytest.skip("Home page has no site-relative links")

            await browser.click_first(selectors.SITE_LINK)

            new_cookies = await browser.cookies()
            assert len(new_cookies) >= len(initial_cookies), (
                f"Cookies dropped across navigation: {len(initial_cookies)} -> {len(new_cookies)}"
            )
