"""
Reporter for screenshot tests.

Each call appends its lines to the builder as it happens. ``end_test``
turns the builder into the full report: it reads back the report left by
earlier tests of the same session, splices the new test after it and
rewrites the file. Calls must come in order (start_test, capture_output,
pass_ or fail, end_test); the order is not checked.
"""

from pathlib import Path
from typing import Optional

from screenshot_reporter.core.config import Config
from screenshot_reporter.core.logging import get_logger
from screenshot_reporter.reporting import document
from screenshot_reporter.reporting.document import ReportBuilder
from screenshot_reporter.reporting.models import TestRecord, classify_failure
from screenshot_reporter.reporting.session import ReportSession
from screenshot_reporter.reporting.storage import (
    DirectoryContext,
    OutputPolicy,
    ReportFileGateway,
    StaticOutputPolicy,
    StorageContext,
)

logger = get_logger(__name__)


class Reporter:
    """Collects screenshot test results into report.yml."""

    def __init__(
        self,
        context: StorageContext,
        session: ReportSession,
        policy: OutputPolicy,
        gateway: Optional[ReportFileGateway] = None,
    ):
        self.context = context
        self.session = session
        self.policy = policy
        self.gateway = gateway or ReportFileGateway(context, policy)
        self.builder = ReportBuilder()
        self.record: Optional[TestRecord] = None
        self._persisted = False

    @classmethod
    def create(cls, config: Config) -> "Reporter":
        """Build a Reporter from configuration."""
        context = DirectoryContext(data_dir=config.data_dir, external_dir=config.external_dir)
        policy = StaticOutputPolicy(sd_card=config.use_sd_card)
        return cls(context, ReportSession(session_id=config.session_id), policy)

    @property
    def yaml(self) -> str:
        """Text currently held by the builder."""
        return str(self.builder)

    def get_report_file(self) -> Path:
        return self.gateway.report_file()

    def insert_header(self) -> None:
        """Put the session header at the top of the builder."""
        self.builder.insert(0, self.session.render_header())

    def start_test(self, test_name: str, class_name: str, package_name: str) -> None:
        """Open a record for a new test."""
        if self._persisted:
            self.builder.clear()
            self._persisted = False
        self.record = TestRecord(test_name=test_name, class_name=class_name, package_name=package_name)
        self.builder.append(document.block_opener_lines(test_name, class_name, package_name))

    def capture_output(self, baseline_path: str, output_path: str) -> None:
        """
        Record where the screenshots live.

        Args:
            baseline_path: Baseline path relative to the assets directory
            output_path: Absolute path of the captured image on the device
        """
        if self.record is not None:
            self.record.baseline_image_path = baseline_path
            self.record.test_image_path = output_path
        self.builder.append(document.capture_lines(baseline_path, output_path))

    def pass_(self) -> None:
        if self.record is not None:
            self.record.mark_passed()
        self.builder.append(document.pass_lines())

    def fail(self, error: BaseException) -> None:
        cause = classify_failure(error)
        description = str(error)
        if self.record is not None:
            self.record.mark_failed(cause, description)
        self.builder.append(document.fail_lines(cause, description))

    def end_test(self) -> str:
        """
        Merge the current test into the report file.

        Returns:
            The report text that was written

        Raises:
            StorageError: If the report file cannot be read or written
        """
        report_file = self.get_report_file()

        existing = None
        if self.gateway.exists(report_file):
            existing = self.gateway.read_lines(report_file)

        block = [] if self._persisted else document.strip_header(self.builder.lines)
        status = self.record.status if self.record is not None else None

        lines = document.merge_document(self.session, existing, block, status)
        self.builder.clear()
        self.builder.append(lines)
        self.record = None
        self._persisted = True

        text = self.yaml
        self.gateway.clear(report_file)
        self.gateway.write(report_file, text)
        logger.debug(f"Wrote {len(lines)} lines to {report_file}")
        return text
