"""Exceptions raised by cargo-testdox."""


class TestdoxError(Exception):
    """Base exception for all cargo-testdox errors."""

    __test__ = False
