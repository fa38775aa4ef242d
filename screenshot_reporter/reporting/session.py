"""
Session identity and counters for a screenshot test run.

A session spans every test of one run. Its identity and counters only live
in the report header, so a process that joins a running session recovers
them by re-parsing the header of the report written before it.
"""

import threading
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from screenshot_reporter.core.errors import ReportParseError
from screenshot_reporter.core.logging import get_logger
from screenshot_reporter.reporting.models import TestStatus

TIMESTAMP_FORMAT = "%Y-%m-%d@%H:%M:%S"

DOCUMENT_START = "---"
TESTS_KEY = "tests"

# Header fields in the order they are emitted, after the document start marker
HEADER_KEYS = ("session", "date", "failed", "passed", "total")

HEADER_LENGTH = len(HEADER_KEYS) + 2

logger = get_logger(__name__)


@dataclass
class SessionHeader:
    """Fields parsed from a report header."""
    session_id: str
    timestamp: str
    fail_count: int
    pass_count: int
    test_count: int


def _header_value(line: str, key: str) -> str:
    prefix = f"- {key}:"
    if not line.startswith(prefix):
        raise ReportParseError(f"Expected '{prefix}' header line, got {line!r}")
    return line[len(prefix):].strip()


def _header_count(line: str, key: str) -> int:
    value = _header_value(line, key)
    try:
        count = int(value)
    except ValueError as e:
        raise ReportParseError(f"Header field '{key}' is not an integer: {value!r}") from e
    if count < 0:
        raise ReportParseError(f"Header field '{key}' is negative: {count}")
    return count


def parse_header(lines: Sequence[str]) -> SessionHeader:
    """
    Parse the header of a report document.

    Args:
        lines: Lines of the report, header first

    Returns:
        Parsed SessionHeader

    Raises:
        ReportParseError: If the header is missing or its fields are out of order
    """
    if len(lines) < HEADER_LENGTH:
        raise ReportParseError(f"Report has {len(lines)} lines, header needs {HEADER_LENGTH}")
    if lines[0].strip() != DOCUMENT_START:
        raise ReportParseError(f"Report does not start with '{DOCUMENT_START}'")
    if lines[HEADER_LENGTH - 1].rstrip() != f"- {TESTS_KEY}:":
        raise ReportParseError(f"Header is not terminated by '- {TESTS_KEY}:'")

    session_line, date_line, failed_line, passed_line, total_line = lines[1:HEADER_LENGTH - 1]
    session_id = _header_value(session_line, "session")
    if not session_id:
        raise ReportParseError("Header has an empty session id")

    return SessionHeader(
        session_id=session_id,
        timestamp=_header_value(date_line, "date"),
        fail_count=_header_count(failed_line, "failed"),
        pass_count=_header_count(passed_line, "passed"),
        test_count=_header_count(total_line, "total"),
    )


class ReportSession:
    """Identity and pass/fail counters of one test run."""

    def __init__(self, session_id: Optional[str] = None, timestamp: Optional[str] = None):
        self.session_id = session_id or self.generate_session_id()
        self.timestamp = timestamp or self.format_timestamp(datetime.now())
        self.fail_count = 0
        self.pass_count = 0
        self.test_count = 0

    @staticmethod
    def generate_session_id() -> str:
        """Random 8 hex digit token plus the creating thread's id (mod 1000)."""
        return f"{uuid.uuid4().hex[:8]}-{threading.get_ident() % 1000}"

    @staticmethod
    def format_timestamp(moment: datetime) -> str:
        return moment.strftime(TIMESTAMP_FORMAT)

    def is_same_session(self, existing_lines: Sequence[str]) -> bool:
        """
        Check whether a previously written report belongs to this session.

        A report without a parseable header never matches.
        """
        try:
            header = parse_header(existing_lines)
        except ReportParseError as e:
            logger.debug(f"Existing report has no usable header: {e}")
            return False
        return header.session_id == self.session_id

    def init_from_lines(self, lines: Sequence[str]) -> None:
        """
        Re-hydrate identity and counters from an existing report's header.

        Raises:
            ReportParseError: If the header is missing; the session is left unchanged
        """
        header = parse_header(lines)
        self.session_id = header.session_id
        self.timestamp = header.timestamp
        self.fail_count = header.fail_count
        self.pass_count = header.pass_count
        self.test_count = header.test_count

    def reset_counts(self) -> None:
        self.fail_count = 0
        self.pass_count = 0
        self.test_count = 0

    def record_outcome(self, status: TestStatus) -> None:
        """Count one finished test."""
        self.test_count += 1
        if status is TestStatus.PASS:
            self.pass_count += 1
        elif status is TestStatus.FAIL:
            self.fail_count += 1

    def render_header(self) -> List[str]:
        """Header lines of the report document, ``---`` through ``- tests:``."""
        return [
            DOCUMENT_START,
            f"- session: {self.session_id}",
            f"- date: {self.timestamp}",
            f"- failed: {self.fail_count}",
            f"- passed: {self.pass_count}",
            f"- total: {self.test_count}",
            f"- {TESTS_KEY}:",
        ]

    def __repr__(self) -> str:
        return (f"ReportSession(session_id={self.session_id!r}, timestamp={self.timestamp!r}, "
                f"failed={self.fail_count}, passed={self.pass_count}, total={self.test_count})")


def lines_to_session(lines: Sequence[str]) -> ReportSession:
    """Build a ReportSession from the header of an existing report."""
    session = ReportSession()
    session.init_from_lines(lines)
    return session
