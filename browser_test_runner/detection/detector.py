"""Poll a test page until its run reaches a terminal state."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from browser_test_runner.config import DEFAULT_TIMEOUT
from browser_test_runner.detection.conventions import CompletionStrategy, is_complete
from browser_test_runner.models.signal import TerminalSignal

log = logging.getLogger(__name__)


class DomProbe(Protocol):
    """Source of DOM snapshots."""

    async def read(self, *, rendered: bool = False) -> TerminalSignal | None:
        """Snapshot the page, or return None if no reading is available."""


@dataclass(frozen=True, kw_only=True)
class CompletionDetector:
    """Re-evaluates a completion predicate against live DOM snapshots."""

    probe: DomProbe
    predicate: CompletionStrategy = is_complete

    async def poll(self) -> TerminalSignal | None:
        """Take one snapshot.

        Returns:
            The snapshot if it shows a finished run, None if still running

        """
        signal = await self.probe.read()
        if signal is None:
            return None

        if self.predicate(signal):
            return signal

        log.debug("Test run still in progress: status=%r", signal.status_text)
        return None

    async def wait_for_completion(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = 0.5,
    ) -> TerminalSignal:
        """Wait for the page to report a finished run.

        The deadline covers the whole wait, including DOM reads that stall
        while the page is busy.

        Args:
            timeout: Maximum wait time in seconds (default: 15 minutes)
            poll_interval: Seconds between snapshots (default: 0.5)

        Returns:
            The first snapshot satisfying the predicate

        Raises:
            TimeoutError: If the run doesn't finish within timeout

        """
        try:
            async with asyncio.timeout(timeout):
                while True:
                    if (signal := await self.poll()) is not None:
                        return signal

                    await asyncio.sleep(poll_interval)
        except TimeoutError as err:
            raise TimeoutError(
                f"Test page did not complete within {timeout} seconds"
            ) from err
