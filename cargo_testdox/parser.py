"""Parse the human-readable output of `cargo test` into test results."""

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from cargo_testdox.models.result import Status, TestResult, UnknownStatusError

log = logging.getLogger(__name__)

MODULE_SEPARATOR = "::"
FN_MARKER = "_fn_"
RESERVED_TEST_MODULES = frozenset({"tests", "test"})

# "test <path> ... <status>", split on the first " ... "
RESULT_LINE_RE = re.compile(r"test (?P<path>.*?) \.\.\. (?P<status>.*)")


@dataclass(frozen=True, kw_only=True)
class RawRecord:
    """Unprocessed test path and status token from a single result line."""

    raw_path: str
    raw_status: str


def classify(line: str) -> RawRecord | None:
    """Decide whether a line of `cargo test` output reports a test result.

    Summary lines (``test result: ...``) and doctest lines, which carry a
    source position such as ``(line 17)`` instead of a module path, are
    rejected even though they start with ``test ``.

    Returns:
        The raw path and status of the test, or None if the line is not a
        test result

    """
    if not line.startswith("test "):
        return None

    rest = line.removeprefix("test ")
    if rest.startswith("result") or " (line " in rest:
        return None

    if (match := RESULT_LINE_RE.fullmatch(line)) is None:
        return None

    return RawRecord(raw_path=match["path"], raw_status=match["status"])


def split_module(raw_path: str) -> tuple[str | None, str]:
    """Split a test path into its enclosing module path and bare test name.

    A trailing ``tests`` or ``test`` module is dropped, since it only wraps
    the test functions. Only the last module segment is considered, and it
    must match exactly.
    """
    *modules, name = raw_path.split(MODULE_SEPARATOR)
    if modules and modules[-1] in RESERVED_TEST_MODULES:
        modules.pop()

    if not modules:
        return None, name
    return MODULE_SEPARATOR.join(modules), name


def humanize(text: str) -> str:
    """Replace underscores with spaces, collapsing runs of whitespace."""
    return " ".join(text.replace("_", " ").split())


def prettify(identifier: str) -> str:
    """Format the name of a test function as a sentence.

    Underscores are replaced with spaces. To keep the underscores in a
    function name, put ``_fn_`` after it, so that
    ``parse_line_fn_parses_a_line`` becomes ``parse_line parses a line``.
    """
    fn_name, marker, sentence = identifier.partition(FN_MARKER)
    if not marker:
        return humanize(identifier)
    return f"{fn_name} {humanize(sentence)}"


def parse_line(line: str) -> TestResult | None:
    """Parse a line from the standard output of `cargo test`.

    Returns:
        The test result if the line reports one, otherwise None

    Raises:
        UnknownStatusError: If the line reports a status other than ok,
            FAILED or ignored

    """
    if (record := classify(line)) is None:
        return None

    module, name = split_module(record.raw_path)
    if not (pretty_name := prettify(name)):
        log.debug("Skipping test with empty name: %r", line)
        return None

    try:
        status = Status.from_token(record.raw_status)
    except UnknownStatusError as e:
        raise UnknownStatusError(e.token, line=line) from None

    return TestResult(module=module, name=pretty_name, status=status)


def parse_test_results(test_output: str) -> Iterator[TestResult]:
    """Parse the standard output of `cargo test` into test results.

    Results are yielded lazily, in the order their lines appear.
    """
    for line in test_output.split("\n"):
        line = line.removesuffix("\r")
        if (result := parse_line(line)) is not None:
            yield result
