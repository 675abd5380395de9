"""DOM snapshot read from a test page."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class TerminalSignal:
    """Text of the elements a test page reports through.

    Missing elements read as empty strings. ``has_status_element`` tells the
    status-style and status-less page conventions apart.
    """

    has_status_element: bool
    status_text: str = ""
    output_text: str = ""
    summary_text: str = ""
