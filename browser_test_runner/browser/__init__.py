"""Headless browser session and DOM access for test pages."""

from browser_test_runner.browser.probe import PageProbe
from browser_test_runner.browser.session import BrowserSession, ConsoleForwarder, launch_session

__all__ = ["BrowserSession", "ConsoleForwarder", "PageProbe", "launch_session"]
