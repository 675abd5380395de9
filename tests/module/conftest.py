"""Fixtures for module tests running pages in a real headless browser."""

from pathlib import Path

import pytest
from playwright.async_api import async_playwright


@pytest.fixture(autouse=True)
async def _require_chromium() -> None:
    """Skip when Playwright's Chromium build is not installed."""
    async with async_playwright() as playwright:
        executable = Path(playwright.chromium.executable_path)
    if not executable.exists():
        pytest.skip("Chromium not installed (run: playwright install chromium)")


@pytest.fixture
def html_dir(tmp_path: Path) -> Path:
    """Directory holding the test pages."""
    directory = tmp_path / "polars-pyodide"
    directory.mkdir()
    return directory


@pytest.fixture
def wheel_dir(tmp_path: Path) -> Path:
    """Artifact directory with one wheel."""
    directory = tmp_path / "wasm-dist"
    directory.mkdir()
    (directory / "polars-1.0-py3-none-any.whl").write_text("wheel-bytes")
    return directory
