"""Configuration for cargo-testdox."""

from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

ColorMode = Literal["auto", "always", "never"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class TestdoxConfig(BaseModel):
    """Configuration for running `cargo test` and printing its results."""

    __test__ = False

    cargo: str = Field(default="cargo", description="cargo executable")
    cwd: Path | None = Field(
        default=None, description="Directory to run cargo in (None means current)"
    )
    color: ColorMode = Field(default="auto", description="When to color output")
    log_level: LogLevel = Field(default="WARNING", description="Diagnostics level")

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "TestdoxConfig":
        """Build the configuration from environment variables.

        Reads CARGO, CARGO_TERM_COLOR and CARGO_TESTDOX_LOG; unset
        variables keep their defaults.
        """
        values: dict[str, str] = {}
        if cargo := environ.get("CARGO"):
            values["cargo"] = cargo
        if color := environ.get("CARGO_TERM_COLOR"):
            values["color"] = color.lower()
        if log_level := environ.get("CARGO_TESTDOX_LOG"):
            values["log_level"] = log_level.upper()
        return cls(**values)

    def use_color(self, *, is_tty: bool, environ: Mapping[str, str]) -> bool:
        """Decide whether rendered results should carry color codes."""
        if self.color == "always":
            return True
        if self.color == "never":
            return False
        return is_tty and not environ.get("NO_COLOR")
