"""Completion detection for in-page test runs."""

from browser_test_runner.detection.conventions import is_complete
from browser_test_runner.detection.detector import CompletionDetector, DomProbe

__all__ = ["CompletionDetector", "DomProbe", "is_complete"]
