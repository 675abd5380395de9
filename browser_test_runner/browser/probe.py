"""Read the reporting elements of a test page."""

import logging
from dataclasses import dataclass, field
from typing import Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from browser_test_runner.models.signal import TerminalSignal

log = logging.getLogger(__name__)

# Reads #status, #output and #summary in one round trip. The argument selects
# the text property: textContent while polling, innerText for final results.
SNAPSHOT_SCRIPT = """
(property) => {
  const read = (id) => {
    const element = document.getElementById(id);
    return element ? (element[property] ?? '') : '';
  };
  return {
    hasStatus: document.getElementById('status') !== null,
    status: read('status'),
    output: read('output'),
    summary: read('summary'),
  };
}
"""

CONTEXT_DESTROYED = "Execution context was destroyed"


def signal_from_snapshot(snapshot: dict[str, Any]) -> TerminalSignal:
    """Build a TerminalSignal from the snapshot script's result."""
    return TerminalSignal(
        has_status_element=bool(snapshot.get("hasStatus")),
        status_text=snapshot.get("status") or "",
        output_text=snapshot.get("output") or "",
        summary_text=snapshot.get("summary") or "",
    )


@dataclass(frozen=True, kw_only=True)
class PageProbe:
    """DOM probe backed by a Playwright page."""

    page: Page = field(repr=False)

    async def read(self, *, rendered: bool = False) -> TerminalSignal | None:
        """Snapshot the reporting elements.

        Returns None while the page is between documents (a reload or
        navigation destroyed the execution context mid-read).
        """
        text_property = "innerText" if rendered else "textContent"
        try:
            snapshot = await self.page.evaluate(SNAPSHOT_SCRIPT, text_property)
        except PlaywrightError as err:
            if CONTEXT_DESTROYED not in str(err):
                raise
            log.debug("Page navigated during DOM read, retrying on next poll")
            return None

        return signal_from_snapshot(snapshot)
