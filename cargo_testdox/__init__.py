"""Print your Rust test names as sentences."""

from cargo_testdox.models.result import Status, TestResult, UnknownStatusError
from cargo_testdox.parser import parse_line, parse_test_results, prettify

__all__ = [
    "Status",
    "TestResult",
    "UnknownStatusError",
    "parse_line",
    "parse_test_results",
    "prettify",
]
