"""
Line grammar of the report document and the merge of an existing report.

The report is YAML-shaped text, but it is written line by line so that the
body of an earlier report can be carried over byte for byte::

    ---
    - session: 1a2b3c4d-1
    - date: 2020-06-26@14:49:45
    - failed: 0
    - passed: 1
    - total: 1
    - tests:
        - test:
            name: default
            class: ClientDetailsViewScreenshotTest
            package: com.example.clients.details
            baseline_image: assets/screenshots/default.png
            test_image: /data/data/com.example/app_images/default.png
            status: PASS
"""

import sys
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from screenshot_reporter.core.errors import ReportParseError
from screenshot_reporter.core.logging import get_logger
from screenshot_reporter.reporting.models import FailureCause, TestStatus
from screenshot_reporter.reporting.session import (
    DOCUMENT_START,
    HEADER_LENGTH,
    ReportSession,
    parse_header,
)

TEST_INDENT = " " * 4
FIELD_INDENT = " " * 8
ASSETS_PREFIX = "assets/"

logger = get_logger(__name__)


def quote(text: str) -> str:
    """Render ``text`` as a single-line YAML double-quoted scalar."""
    dumped = yaml.safe_dump(text, default_style='"', width=sys.maxsize, allow_unicode=True)
    return dumped.split("\n", 1)[0]


def field_line(key: str, value: Any) -> str:
    return f"{FIELD_INDENT}{key}: {value}"


def block_opener_lines(test_name: str, class_name: str, package_name: str) -> List[str]:
    """Opening lines of a test block."""
    return [
        f"{TEST_INDENT}- test:",
        field_line("name", test_name),
        field_line("class", class_name),
        field_line("package", package_name),
    ]


def capture_lines(baseline_path: str, output_path: str) -> List[str]:
    """Image lines; the baseline is relative to the assets directory."""
    return [
        field_line("baseline_image", f"{ASSETS_PREFIX}{baseline_path}"),
        field_line("test_image", output_path),
    ]


def pass_lines() -> List[str]:
    return [field_line("status", TestStatus.PASS.value)]


def fail_lines(cause: FailureCause, description: str) -> List[str]:
    return [
        field_line("status", TestStatus.FAIL.value),
        field_line("cause", cause.value),
        field_line("description", quote(description)),
    ]


class ReportBuilder:
    """Append-only buffer of report lines."""

    def __init__(self):
        self._lines: List[str] = []

    def append(self, lines: Sequence[str]) -> None:
        self._lines.extend(lines)

    def insert(self, index: int, lines: Sequence[str]) -> None:
        self._lines[index:index] = lines

    def clear(self) -> None:
        self._lines.clear()

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __str__(self) -> str:
        return render(self._lines)


def render(lines: Sequence[str]) -> str:
    """Join report lines, each terminated by a newline."""
    return "".join(f"{line}\n" for line in lines)


def strip_header(lines: Sequence[str]) -> List[str]:
    """Drop a header left at the top of builder lines by insert_header."""
    if lines and lines[0] == DOCUMENT_START:
        return list(lines[HEADER_LENGTH:])
    return list(lines)


def split_document(lines: Sequence[str]) -> Tuple[List[str], List[str]]:
    """
    Split report lines into header and body.

    Raises:
        ReportParseError: If the lines do not start with a valid header
    """
    parse_header(lines)
    return list(lines[:HEADER_LENGTH]), list(lines[HEADER_LENGTH:])


def merge_document(
    session: ReportSession,
    existing_lines: Optional[Sequence[str]],
    block: Sequence[str],
    status: Optional[TestStatus] = None,
) -> List[str]:
    """
    Build the report to persist for the test that just finished.

    If ``existing_lines`` belong to ``session``, the session's counters are
    re-read from their header and their body is kept ahead of ``block``,
    which takes the body's indentation so that older two-space reports stay
    valid YAML.
    Otherwise the report starts over and holds only ``block``. ``status``
    is counted when a test was reported; ``None`` leaves the counters as
    they are.

    Args:
        session: Current session, updated in place
        existing_lines: Lines of the report on disk, or None if there is none
        block: Lines of the test that just finished
        status: Outcome of that test

    Returns:
        Full list of report lines
    """
    body: List[str] = []
    if existing_lines is not None and session.is_same_session(existing_lines):
        session.init_from_lines(existing_lines)
        _, body = split_document(existing_lines)
        logger.info(f"Appending to session {session.session_id} ({session.test_count} tests so far)")
    else:
        if existing_lines is not None:
            logger.info(f"Existing report belongs to another session, starting session {session.session_id}")
        session.reset_counts()

    if status is not None:
        session.record_outcome(status)

    # Trailing blank lines of the old body would split the tests list
    while body and not body[-1].strip():
        body.pop()

    return session.render_header() + body + match_layout(block, body)


def _body_layout(body: Sequence[str]) -> Optional[Tuple[str, str]]:
    """Test and field indentation of the first test block in ``body``."""
    for index, line in enumerate(body):
        if line.lstrip() == "- test:":
            test_indent = line[:len(line) - len(line.lstrip())]
            if index + 1 < len(body):
                field = body[index + 1]
                return test_indent, field[:len(field) - len(field.lstrip())]
            return test_indent, test_indent + "  "
    return None


def match_layout(block: Sequence[str], body: Sequence[str]) -> List[str]:
    """Re-indent ``block`` to the layout of an existing ``body``."""
    layout = _body_layout(body)
    if layout is None or layout == (TEST_INDENT, FIELD_INDENT):
        return list(block)

    test_indent, field_indent = layout
    logger.debug(f"Writing block with {len(test_indent)}/{len(field_indent)} space indentation to match report")
    lines = []
    for line in block:
        stripped = line.lstrip()
        lines.append((test_indent if stripped == "- test:" else field_indent) + stripped)
    return lines


def _test_entry(item: Any) -> Dict[str, Any]:
    if not isinstance(item, dict):
        raise ReportParseError(f"Unexpected test entry: {item!r}")
    nested = item.get("test")
    if isinstance(nested, dict):
        return dict(nested)
    # Two-space layout: the fields are siblings of the "test" key
    return {key: value for key, value in item.items() if key != "test"}


def load_report(text: str) -> Dict[str, Any]:
    """
    Parse report text into a dictionary.

    Returns:
        Dictionary with session, date, failed, passed, total and tests keys

    Raises:
        ReportParseError: If the text is not a report document
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ReportParseError(f"Report is not valid YAML: {e}") from e

    if not isinstance(data, list):
        raise ReportParseError("Report is not a list of header entries")

    report: Dict[str, Any] = {"tests": []}
    for entry in data:
        if not isinstance(entry, dict):
            raise ReportParseError(f"Unexpected header entry: {entry!r}")
        for key, value in entry.items():
            if key == "tests":
                report["tests"] = [_test_entry(item) for item in (value or [])]
            else:
                report[key] = value

    missing = [key for key in ("session", "failed", "passed", "total") if key not in report]
    if missing:
        raise ReportParseError(f"Report header is missing {', '.join(missing)}")
    report["session"] = str(report["session"])
    if "date" in report:
        report["date"] = str(report["date"])
    return report
