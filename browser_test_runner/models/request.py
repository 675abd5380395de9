"""Model for a single harness invocation."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_WHEEL_DIR = Path("wasm-dist")


class InvocationRequest(BaseModel):
    """What to run: the test page, the artifact directory and the policy.

    Paths are made absolute against the working directory on construction.
    """

    model_config = ConfigDict(frozen=True)

    test_file: Path = Field(..., description="HTML test page to load")
    wheel_dir: Path = Field(
        default=DEFAULT_WHEEL_DIR,
        description="Build artifact directory served under the wheel prefix",
    )
    strict: bool = Field(
        default=False, description="Treat any detected failure as exit code 1"
    )

    @field_validator("test_file", "wheel_dir")
    @classmethod
    def _resolve(cls, value: Path) -> Path:
        return value.resolve()

    @property
    def html_dir(self) -> Path:
        """Directory containing the test page."""
        return self.test_file.parent

    @property
    def suite_name(self) -> str:
        """Test page file name without its extension (e.g. "test-smoke")."""
        return self.test_file.stem
