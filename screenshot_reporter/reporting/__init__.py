"""
Screenshot test reporting.

This module provides:
- Test record and failure cause data structures
- Session identity and header parsing
- The report line grammar and merge of an existing report
- Report file location and access
"""

from screenshot_reporter.reporting.models import TestRecord, TestStatus, FailureCause, classify_failure
from screenshot_reporter.reporting.session import ReportSession, SessionHeader, parse_header, lines_to_session
from screenshot_reporter.reporting.document import ReportBuilder, load_report, merge_document
from screenshot_reporter.reporting.storage import (
    DirectoryContext,
    OutputPolicy,
    ReportFileGateway,
    StaticOutputPolicy,
    StorageContext,
)
from screenshot_reporter.reporting.reporter import Reporter

__all__ = [
    "TestRecord",
    "TestStatus",
    "FailureCause",
    "classify_failure",
    "ReportSession",
    "SessionHeader",
    "parse_header",
    "lines_to_session",
    "ReportBuilder",
    "load_report",
    "merge_document",
    "DirectoryContext",
    "OutputPolicy",
    "ReportFileGateway",
    "StaticOutputPolicy",
    "StorageContext",
    "Reporter",
]
