"""Completion predicates for the two test page conventions.

Status-style pages expose a ``#status`` element whose phrase turns into an
outcome word when the run ends. Status-less pages only accumulate text in
``#output`` and finish with an ``N/M passed`` tally. Either kind may also
populate ``#summary``, which counts as completion on its own.
"""

import re
from collections.abc import Callable
from typing import TypeAlias

from browser_test_runner.models.signal import TerminalSignal

CompletionStrategy: TypeAlias = Callable[[TerminalSignal], bool]

INITIALISING_SENTINELS = frozenset({"initialising", "initializing"})
STATUS_OUTCOME_PATTERN = re.compile(r"passed|failed|error", re.IGNORECASE)
OUTPUT_TALLY_PATTERN = re.compile(r"\d+/\d+ passed")


def status_is_initialising(status_text: str) -> bool:
    """Check for an empty status or the initialising sentinel."""
    phrase = status_text.strip().rstrip("….").strip().casefold()
    return not phrase or phrase in INITIALISING_SENTINELS


def status_style_complete(signal: TerminalSignal) -> bool:
    """Status element holds an outcome word."""
    if status_is_initialising(signal.status_text):
        return False
    return STATUS_OUTCOME_PATTERN.search(signal.status_text) is not None


def statusless_complete(signal: TerminalSignal) -> bool:
    """Output text contains an ``N/M passed`` tally."""
    return OUTPUT_TALLY_PATTERN.search(signal.output_text) is not None


def summary_complete(signal: TerminalSignal) -> bool:
    """Summary element has non-blank text."""
    return bool(signal.summary_text.strip())


def completion_strategy(signal: TerminalSignal) -> CompletionStrategy:
    """Select the page convention from the shape of the DOM."""
    if signal.has_status_element:
        return status_style_complete
    return statusless_complete


def is_complete(signal: TerminalSignal) -> bool:
    """Check whether the snapshot shows a finished test run."""
    return completion_strategy(signal)(signal) or summary_complete(signal)
