"""Configuration for the browser test runner."""

from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_TIMEOUT = 15 * 60


class HarnessConfig(BaseModel):
    """Configuration for serving, browsing and polling."""

    host: str = "127.0.0.1"
    wheel_prefix: str = "/wasm-dist/"
    browser: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    poll_interval: float = Field(default=0.5, gt=0)
