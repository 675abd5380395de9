"""Models for run outcomes."""

from dataclasses import dataclass
from typing import Literal, TypeAlias

from browser_test_runner.models.signal import TerminalSignal

RunStatus: TypeAlias = Literal["passed", "failed", "timeout"]


@dataclass(frozen=True, kw_only=True)
class RunOutcome:
    """Final outcome of a harness run.

    ``status`` describes what the page reported; ``exit_code`` is what the
    process returns once the strictness policy has been applied.
    """

    status: RunStatus
    exit_code: Literal[0, 1]
    signal: TerminalSignal | None = None
