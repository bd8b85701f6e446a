"""CLI entry point for cargo-testdox."""

import asyncio
import logging
import os
import sys
from collections.abc import Sequence

import colorama

from cargo_testdox.config import TestdoxConfig
from cargo_testdox.errors import TestdoxError
from cargo_testdox.models.result import Status, TestResult
from cargo_testdox.parser import parse_test_results
from cargo_testdox.runner import run_cargo_test

SUBCOMMAND = "testdox"


def split_cargo_args(argv: Sequence[str]) -> Sequence[str]:
    """Strip the subcommand name cargo passes when run as `cargo testdox`.

    Everything else is passed through to `cargo test` unchanged.
    """
    if argv and argv[0] == SUBCOMMAND:
        return tuple(argv[1:])
    return tuple(argv)


def print_results(results: Sequence[TestResult], *, color: bool = False) -> None:
    """Print one rendered line per test result."""
    for result in results:
        print(result.render(color=color))


async def run(
    config: TestdoxConfig,
    cargo_args: Sequence[str] = (),
    *,
    color: bool = False,
) -> int:
    """Run the tests, print their results and return the exit code."""
    log = logging.getLogger("cargo_testdox")

    test_run = await run_cargo_test(config, cargo_args)
    results = list(parse_test_results(test_run.stdout))
    log.info("Parsed %d test result(s)", len(results))

    print_results(results, color=color)

    if any(result.status is Status.FAIL for result in results):
        return 1

    if test_run.returncode != 0:
        if results:
            # e.g. a failing doctest, which is not reported as a result
            log.error(
                "cargo test exited with status %d but no listed test failed",
                test_run.returncode,
            )
        else:
            log.error(
                "cargo test exited with status %d without reporting any tests",
                test_run.returncode,
            )
        return test_run.returncode

    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    cargo_args = split_cargo_args(sys.argv[1:] if argv is None else argv)
    config = TestdoxConfig.from_env(os.environ)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    colorama.just_fix_windows_console()
    color = config.use_color(is_tty=sys.stdout.isatty(), environ=os.environ)

    try:
        exit_code = asyncio.run(run(config, cargo_args, color=color))
    except TestdoxError as e:
        logging.getLogger("cargo_testdox").error("%s", e)
        exit_code = 2
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
