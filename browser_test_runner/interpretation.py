"""Classify a finished test run and apply the exit code policy."""

import re
import sys
from typing import Literal, TextIO

from browser_test_runner.models.result import RunOutcome
from browser_test_runner.models.signal import TerminalSignal

FAILURE_PATTERN = re.compile(r"failed|error", re.IGNORECASE)


def is_failure(signal: TerminalSignal) -> bool:
    """Check the summary (or the status, when there is no summary) for failures."""
    verdict = signal.summary_text or signal.status_text
    return FAILURE_PATTERN.search(verdict) is not None


def exit_code_for(*, failed: bool, strict: bool) -> Literal[0, 1]:
    """Only strict runs turn a detected failure into a non-zero exit code."""
    return 1 if strict and failed else 0


def interpret(signal: TerminalSignal, *, strict: bool) -> RunOutcome:
    """Derive the run outcome from the final page text."""
    failed = is_failure(signal)
    return RunOutcome(
        status="failed" if failed else "passed",
        exit_code=exit_code_for(failed=failed, strict=strict),
        signal=signal,
    )


def timeout_outcome() -> RunOutcome:
    """Outcome for a run whose completion was never observed."""
    return RunOutcome(status="timeout", exit_code=1)


def print_results(signal: TerminalSignal, stream: TextIO | None = None) -> None:
    """Write the page's output, summary and status to stdout."""
    stream = stream or sys.stdout
    if signal.output_text:
        print(signal.output_text, file=stream)
    if signal.summary_text:
        print("Summary:", signal.summary_text, file=stream)
    if signal.status_text:
        print("Status: ", signal.status_text, file=stream)
    stream.flush()
