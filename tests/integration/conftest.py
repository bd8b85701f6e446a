"""Fixtures for integration tests."""

import shutil
import stat
from pathlib import Path
from typing import Protocol

import pytest

CARGO_TOML = """\
[package]
name = "test-project"
version = "0.1.0"
edition = "2021"
"""

LIB_RS = """
#[cfg(test)]
mod tests {
    #[test]
    fn test_one() {
        assert_eq!(1 + 1, 2);
    }

    #[test]
    fn test_two() {
        assert_eq!(2 * 2, 4);
    }

    #[test]
    #[ignore]
    fn ignored_test_one() {
        assert_eq!(1 + 1, 2);
    }

    #[test]
    #[ignore]
    fn ignored_test_two() {
        assert_eq!(2 * 2, 4);
    }
}
"""

MAIN_RS = """
fn main() {
    println!("{}", greet("World"));
}

fn greet(name: &str) -> String {
    format!("Hello, {name}!")
}

#[cfg(test)]
mod tests {
    use super::*;

    #[test]
    fn test_greet() {
        assert_eq!(greet("Alice"), "Hello, Alice!");
    }
}
"""


class FakeCargoFn(Protocol):
    """Protocol for fake cargo creation function."""

    def __call__(self, stdout: str, *, stderr: str = "", exit_code: int = 0) -> Path:
        """Create an executable that prints the given output and exits."""


@pytest.fixture
def fake_cargo(tmp_path: Path) -> FakeCargoFn:
    """Create shell scripts standing in for cargo."""

    def _create(stdout: str, *, stderr: str = "", exit_code: int = 0) -> Path:
        (tmp_path / "stdout.txt").write_text(stdout)
        (tmp_path / "stderr.txt").write_text(stderr)
        script = tmp_path / "cargo"
        script.write_text(
            "#!/bin/sh\n"
            f'echo "$@" > "{tmp_path}/args.txt"\n'
            f'cat "{tmp_path}/stdout.txt"\n'
            f'cat "{tmp_path}/stderr.txt" >&2\n'
            f"exit {exit_code}\n"
        )
        script.chmod(script.stat().st_mode | stat.S_IEXEC)
        return script

    return _create


@pytest.fixture
def cargo_project(tmp_path: Path) -> Path:
    """Create a Rust project with library and binary tests."""
    if shutil.which("cargo") is None:
        pytest.skip("cargo is not installed")

    project = tmp_path / "test-project"
    (project / "src").mkdir(parents=True)
    (project / "Cargo.toml").write_text(CARGO_TOML)
    (project / "src" / "lib.rs").write_text(LIB_RS)
    (project / "src" / "main.rs").write_text(MAIN_RS)
    return project
