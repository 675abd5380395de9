"""Tests for the browser session controller."""

import io
from unittest.mock import AsyncMock, Mock, patch

import pytest
from playwright.async_api import Error as PlaywrightError

from browser_test_runner.browser.session import (
    BrowserSession,
    ConsoleForwarder,
    close_browser,
    launch_session,
)
from browser_test_runner.config import HarnessConfig


class TestConsoleForwarder:
    """Tests for ConsoleForwarder."""

    def test_forwards_error_messages(self) -> None:
        """Error-level console messages are prefixed and written."""
        stream = io.StringIO()
        forwarder = ConsoleForwarder(stream=stream)

        forwarder.on_console(Mock(type="error", text="Failed to load wheel"))

        assert stream.getvalue() == "[browser:error] Failed to load wheel\n"

    @pytest.mark.parametrize("message_type", ["log", "info", "warning", "debug"])
    def test_discards_other_messages(self, message_type: str) -> None:
        """Non-error console messages are dropped."""
        stream = io.StringIO()
        forwarder = ConsoleForwarder(stream=stream)

        forwarder.on_console(Mock(type=message_type, text="noise"))

        assert stream.getvalue() == ""

    def test_forwards_page_errors(self) -> None:
        """Uncaught page exceptions are forwarded with their own prefix."""
        stream = io.StringIO()
        forwarder = ConsoleForwarder(stream=stream)

        forwarder.on_page_error(PlaywrightError("ReferenceError: pyodide is not defined"))

        assert stream.getvalue() == (
            "[browser:pageerror] ReferenceError: pyodide is not defined\n"
        )

    def test_defaults_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Without a stream, messages go to stderr."""
        ConsoleForwarder().on_console(Mock(type="error", text="boom"))

        captured = capsys.readouterr()
        assert captured.err == "[browser:error] boom\n"
        assert captured.out == ""


class TestBrowserSession:
    """Tests for BrowserSession."""

    async def test_navigate_waits_for_dom_content_loaded(self) -> None:
        """Navigation waits for the initial DOM only, with no timeout of its own."""
        page = Mock()
        page.goto = AsyncMock()
        session = BrowserSession(browser=Mock(), page=page)

        await session.navigate("http://127.0.0.1:1234/test.html")

        page.goto.assert_awaited_once_with(
            "http://127.0.0.1:1234/test.html",
            wait_until="domcontentloaded",
            timeout=0,
        )


async def test_close_browser_swallows_errors(caplog: pytest.LogCaptureFixture) -> None:
    """Closing after the browser already died logs a warning and does not raise."""
    browser = Mock()
    browser.close = AsyncMock(side_effect=PlaywrightError("Browser has been closed"))

    await close_browser(browser)
    await close_browser(browser)

    assert browser.close.await_count == 2
    assert "Failed to close browser cleanly" in caplog.text


class TestLaunchSession:
    """Tests for launch_session."""

    @pytest.fixture
    def page(self) -> Mock:
        """Mock page."""
        return Mock()

    @pytest.fixture
    def browser(self, page: Mock) -> Mock:
        """Mock browser returning the mock page."""
        browser = Mock(version="120.0")
        browser.new_page = AsyncMock(return_value=page)
        browser.close = AsyncMock()
        return browser

    @pytest.fixture
    def playwright(self, browser: Mock) -> Mock:
        """Mock Playwright driver launching the mock browser."""
        playwright = Mock()
        for name in ("chromium", "firefox", "webkit"):
            getattr(playwright, name).launch = AsyncMock(return_value=browser)
        return playwright

    @pytest.fixture
    def mock_context_manager(self, playwright: Mock) -> AsyncMock:
        """Mock async_playwright() context manager."""
        cm = AsyncMock()
        cm.__aenter__.return_value = playwright
        cm.__aexit__.return_value = None
        return cm

    async def test_launches_configured_browser(
        self,
        mock_context_manager: AsyncMock,
        playwright: Mock,
        browser: Mock,
        page: Mock,
    ) -> None:
        """Launches the configured engine headless and yields one page."""
        config = HarnessConfig(browser="firefox")

        with patch(
            "browser_test_runner.browser.session.async_playwright",
            return_value=mock_context_manager,
        ):
            async with launch_session(config) as session:
                assert session.page is page
                assert session.browser is browser

        playwright.firefox.launch.assert_awaited_once_with(headless=True)
        playwright.chromium.launch.assert_not_called()
        browser.close.assert_awaited_once()

    async def test_registers_console_forwarding(
        self, mock_context_manager: AsyncMock, page: Mock
    ) -> None:
        """Console and page error events are wired to the forwarder."""
        forwarder = ConsoleForwarder(stream=io.StringIO())

        with patch(
            "browser_test_runner.browser.session.async_playwright",
            return_value=mock_context_manager,
        ):
            async with launch_session(HarnessConfig(), forwarder=forwarder):
                pass

        page.on.assert_any_call("console", forwarder.on_console)
        page.on.assert_any_call("pageerror", forwarder.on_page_error)

    async def test_closes_browser_on_error(
        self, mock_context_manager: AsyncMock, browser: Mock
    ) -> None:
        """The browser is closed when the body raises."""
        with (
            patch(
                "browser_test_runner.browser.session.async_playwright",
                return_value=mock_context_manager,
            ),
            pytest.raises(RuntimeError, match="boom"),
        ):
            async with launch_session(HarnessConfig()):
                raise RuntimeError("boom")

        browser.close.assert_awaited_once()

    async def test_closes_browser_when_page_creation_fails(
        self, mock_context_manager: AsyncMock, browser: Mock
    ) -> None:
        """The browser is closed when opening the page fails."""
        browser.new_page.side_effect = PlaywrightError("Target closed")

        with (
            patch(
                "browser_test_runner.browser.session.async_playwright",
                return_value=mock_context_manager,
            ),
            pytest.raises(PlaywrightError),
        ):
            async with launch_session(HarnessConfig()):
                pass  # pragma: no cover

        browser.close.assert_awaited_once()
