"""Browser session lifecycle and console forwarding."""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TextIO

from playwright.async_api import Browser, ConsoleMessage, Page, async_playwright
from playwright.async_api import Error as PlaywrightError

from browser_test_runner.config import HarnessConfig

log = logging.getLogger(__name__)

CONSOLE_ERROR_PREFIX = "[browser:error]"
PAGE_ERROR_PREFIX = "[browser:pageerror]"


@dataclass(frozen=True, kw_only=True)
class ConsoleForwarder:
    """Relays in-page errors to the host error stream.

    Only error-level console messages and uncaught page exceptions are
    forwarded; every other console message is dropped.
    """

    stream: TextIO | None = None

    def on_console(self, message: ConsoleMessage) -> None:
        """Handle a page "console" event."""
        if message.type == "error":
            self._write(CONSOLE_ERROR_PREFIX, message.text)

    def on_page_error(self, error: PlaywrightError) -> None:
        """Handle a page "pageerror" event."""
        self._write(PAGE_ERROR_PREFIX, str(error))

    def _write(self, prefix: str, text: str) -> None:
        print(f"{prefix} {text}", file=self.stream or sys.stderr, flush=True)


@dataclass(frozen=True, kw_only=True)
class BrowserSession:
    """A launched browser with the single page a run uses."""

    browser: Browser
    page: Page

    async def navigate(self, url: str) -> None:
        """Open the URL, waiting only for the initial DOM to parse.

        Playwright's own navigation timeout is disabled; callers bound the
        wait with their run deadline.
        """
        log.info("Opening %s", url)
        await self.page.goto(url, wait_until="domcontentloaded", timeout=0)


async def close_browser(browser: Browser) -> None:
    """Close a browser, logging rather than raising on failure."""
    try:
        await browser.close()
    except PlaywrightError as err:
        log.warning("Failed to close browser cleanly: %s", err)


@asynccontextmanager
async def launch_session(
    config: HarnessConfig, forwarder: ConsoleForwarder | None = None
) -> AsyncGenerator[BrowserSession, None]:
    """Launch a browser and page, closing both when the context exits."""
    forwarder = forwarder or ConsoleForwarder()

    async with async_playwright() as playwright:
        browser_type = getattr(playwright, config.browser)
        browser = await browser_type.launch(headless=config.headless)
        log.info("Launched %s %s", config.browser, browser.version)
        try:
            page = await browser.new_page()
            page.on("console", forwarder.on_console)
            page.on("pageerror", forwarder.on_page_error)
            yield BrowserSession(browser=browser, page=page)
        finally:
            await close_browser(browser)
