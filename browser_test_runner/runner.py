"""Run one test page end to end inside a structured cleanup scope."""

import asyncio
import logging
from dataclasses import dataclass, field

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from browser_test_runner.browser.probe import PageProbe
from browser_test_runner.browser.session import BrowserSession, ConsoleForwarder, launch_session
from browser_test_runner.config import HarnessConfig
from browser_test_runner.detection.detector import CompletionDetector
from browser_test_runner.interpretation import interpret, print_results, timeout_outcome
from browser_test_runner.models.request import InvocationRequest
from browser_test_runner.models.result import RunOutcome
from browser_test_runner.models.signal import TerminalSignal
from browser_test_runner.server.app import serve_assets
from browser_test_runner.server.resolver import AssetResolver

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class HarnessRunner:
    """Serves a test page, loads it headless and collects its verdict."""

    config: HarnessConfig = field(default_factory=HarnessConfig)
    forwarder: ConsoleForwarder = field(default_factory=ConsoleForwarder)

    async def run(self, request: InvocationRequest) -> RunOutcome:
        """Run the test page and return its outcome.

        One deadline covers navigation, the completion wait and the final
        read. The browser is closed before the server, on every exit path.

        Args:
            request: Test page, artifact directory and strictness

        Returns:
            Outcome with the exit code for the request's strictness

        """
        resolver = AssetResolver.for_test_page(
            request.html_dir, request.wheel_dir, self.config.wheel_prefix
        )

        async with (
            serve_assets(resolver, host=self.config.host) as server,
            launch_session(self.config, forwarder=self.forwarder) as session,
        ):
            log.info("Waiting for test results (timeout %ss)...", self.config.timeout)
            try:
                async with asyncio.timeout(self.config.timeout):
                    final = await self._collect(session, server.url_for(request.test_file.name))
            except (TimeoutError, PlaywrightTimeoutError):
                log.error("Timed out waiting for test results.")
                return timeout_outcome()

            print_results(final)

        return interpret(final, strict=request.strict)

    async def _collect(self, session: BrowserSession, url: str) -> TerminalSignal:
        await session.navigate(url)

        probe = PageProbe(page=session.page)
        detector = CompletionDetector(probe=probe)
        terminal = await detector.wait_for_completion(
            timeout=self.config.timeout,
            poll_interval=self.config.poll_interval,
        )
        return await probe.read(rendered=True) or terminal
