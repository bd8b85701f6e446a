"""Models for parsed test results."""

from dataclasses import dataclass
from enum import StrEnum

from colorama import Fore, Style

from cargo_testdox.errors import TestdoxError


class UnknownStatusError(TestdoxError):
    """Raised when a result line carries a status outside the known vocabulary."""

    def __init__(self, token: str, line: str | None = None) -> None:
        self.token = token
        self.line = line
        message = f"unhandled test status {token!r}"
        if line is not None:
            message = f"{message} in line {line!r}"
        super().__init__(message)


class Status(StrEnum):
    """The status of a given test, as reported by `cargo test`."""

    PASS = "ok"
    FAIL = "FAILED"
    IGNORED = "ignored"

    @classmethod
    def from_token(cls, token: str) -> "Status":
        """Map a raw status token to a Status.

        Anything after the first ", " is an annotation, such as the reason
        printed for `#[ignore = "reason"]` tests, and is not part of the status.

        Raises:
            UnknownStatusError: If the token is not one of ok, FAILED, ignored

        """
        try:
            return cls(token.partition(", ")[0])
        except ValueError:
            raise UnknownStatusError(token) from None

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]

    @property
    def color(self) -> str:
        return _COLORS[self]


_GLYPHS = {
    Status.PASS: "✔",
    Status.FAIL: "x",
    Status.IGNORED: "?",
}

_COLORS = {
    Status.PASS: Fore.LIGHTGREEN_EX,
    Status.FAIL: Fore.LIGHTRED_EX,
    Status.IGNORED: Fore.LIGHTYELLOW_EX,
}

MODULE_COLOR = Fore.LIGHTBLUE_EX


def _paint(text: str, color: str) -> str:
    return f"{color}{text}{Style.RESET_ALL}"


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """The prettified module, name and status of a single test."""

    __test__ = False

    module: str | None
    name: str
    status: Status

    def render(self, *, color: bool = False) -> str:
        """Render the result as a single console line.

        With color enabled the glyph and module carry ANSI color codes;
        the visible text is the same either way.
        """
        glyph = self.status.glyph
        module = self.module
        if color:
            glyph = _paint(glyph, self.status.color)
            if module is not None:
                module = _paint(module, MODULE_COLOR)

        if module is None:
            return f"{glyph} {self.name}"
        return f"{glyph} {module} – {self.name}"

    def __str__(self) -> str:
        return self.render()
