"""Serve a browser test page, run it headless and map its results to an exit code."""
