"""Run `cargo test` and capture its output."""

import asyncio
import logging
import shlex
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from cargo_testdox.config import TestdoxConfig
from cargo_testdox.errors import TestdoxError

log = logging.getLogger(__name__)


class CargoInvocationError(TestdoxError):
    """Raised when the cargo process cannot be started."""


@dataclass(frozen=True, kw_only=True)
class CargoTestRun:
    """Captured outcome of a `cargo test` process."""

    stdout: str
    returncode: int


def build_command(config: TestdoxConfig, cargo_args: Sequence[str]) -> list[str]:
    """Build the `cargo test` command line, passing extra arguments through."""
    return [config.cargo, "test", *cargo_args]


async def run_cargo_test(
    config: TestdoxConfig, cargo_args: Sequence[str] = ()
) -> CargoTestRun:
    """Run `cargo test` with any supplied extra arguments.

    Standard error, which carries cargo's build progress and diagnostics, is
    forwarded to our own standard error. Invalid UTF-8 in either stream is
    replaced rather than rejected.

    Args:
        config: Configuration naming the cargo executable and directory
        cargo_args: Arguments appended after `cargo test`

    Returns:
        The decoded standard output and the exit code of the process

    Raises:
        CargoInvocationError: If the process cannot be started

    """
    cmd = build_command(config, cargo_args)
    log.info("Running: %s", shlex.join(cmd))

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=config.cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise CargoInvocationError(
            f"Failed to execute {shlex.join(cmd)}: {e}"
        ) from e

    stdout, stderr = await process.communicate()
    returncode = process.returncode if process.returncode is not None else 0
    log.info("cargo test exited with status %d", returncode)

    if stderr:
        print(stderr.decode("utf-8", errors="replace"), end="", file=sys.stderr)

    return CargoTestRun(
        stdout=stdout.decode("utf-8", errors="replace"),
        returncode=returncode,
    )
