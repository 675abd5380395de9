"""CLI entry point for running a browser test page."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import NoReturn

from browser_test_runner.config import DEFAULT_TIMEOUT, HarnessConfig
from browser_test_runner.models.request import DEFAULT_WHEEL_DIR, InvocationRequest
from browser_test_runner.models.result import RunOutcome
from browser_test_runner.runner import HarnessRunner

STATUS_SYMBOLS = {
    "passed": "✅",
    "failed": "❌",
    "timeout": "⏱️",
}


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser reporting usage errors with exit code 1."""

    def error(self, message: str) -> NoReturn:
        """Print usage and the error to stderr, then exit 1."""
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def positive_seconds(value: str) -> float:
    """Parse a strictly positive number of seconds."""
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of seconds: {value!r}") from None
    if not seconds > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return seconds


def log_outcome(log: logging.Logger, suite: str, outcome: RunOutcome, *, strict: bool) -> None:
    """Log the final verdict of a run."""
    symbol = STATUS_SYMBOLS.get(outcome.status, "?")
    log.info(
        "%s %s: %s (%s mode, exit code %d)",
        symbol,
        suite,
        outcome.status,
        "strict" if strict else "lenient",
        outcome.exit_code,
    )
    if outcome.status == "failed" and not strict:
        log.info("  Failures are tolerated in lenient mode")


async def run(
    test_file: Path,
    wheel_dir: Path = DEFAULT_WHEEL_DIR,
    *,
    strict: bool = False,
    config: HarnessConfig | None = None,
) -> int:
    """Run a test page and return the exit code."""
    log = logging.getLogger("browser_test_runner")

    request = InvocationRequest(test_file=test_file, wheel_dir=wheel_dir, strict=strict)
    if not request.test_file.is_file():
        log.error("Test file not found: %s", request.test_file)
        return 1
    if not request.wheel_dir.is_dir():
        log.warning("Wheel directory not found: %s", request.wheel_dir)

    log.info(
        "Running %s (%s mode), wheels from %s",
        request.test_file.name,
        "strict" if strict else "lenient",
        request.wheel_dir,
    )

    runner = HarnessRunner(config=config or HarnessConfig())
    outcome = await runner.run(request)

    log_outcome(log, request.suite_name, outcome, strict=strict)
    return outcome.exit_code


def build_parser() -> ArgumentParser:
    """Build the command line parser."""
    parser = ArgumentParser(
        description="Run a browser test page headless and report its results"
    )
    parser.add_argument("test_file", type=Path, help="HTML test page to run")
    parser.add_argument(
        "wheel_dir",
        type=Path,
        nargs="?",
        default=DEFAULT_WHEEL_DIR,
        help=f"Build artifact directory (default: {DEFAULT_WHEEL_DIR})",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit 1 when the page reports any failure",
    )
    parser.add_argument(
        "--timeout",
        type=positive_seconds,
        default=DEFAULT_TIMEOUT,
        help="Seconds to wait for the test run to finish (default: 900)",
    )
    parser.add_argument(
        "--browser",
        choices=["chromium", "firefox", "webkit"],
        default="chromium",
        help="Browser engine to run the page in (default: chromium)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-request and per-poll diagnostics",
    )
    return parser


def main() -> None:
    """CLI entry point."""
    args = build_parser().parse_intermixed_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            test_file=args.test_file,
            wheel_dir=args.wheel_dir,
            strict=args.strict,
            config=HarnessConfig(timeout=args.timeout, browser=args.browser),
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
