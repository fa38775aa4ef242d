from pathlib import Path

import pytest

from screenshot_reporter.reporting.reporter import Reporter
from screenshot_reporter.reporting.session import ReportSession
from screenshot_reporter.reporting.storage import DirectoryContext, StaticOutputPolicy
from screenshot_reporter.tests.samples import SESSION_ID, TIMESTAMP


@pytest.fixture
def context(tmp_path: Path) -> DirectoryContext:
    return DirectoryContext(data_dir=tmp_path / "data", external_dir=tmp_path / "sdcard")


@pytest.fixture
def session() -> ReportSession:
    session = ReportSession(session_id=SESSION_ID, timestamp=TIMESTAMP)
    session.fail_count = 1
    session.pass_count = 2
    session.test_count = 3
    return session


@pytest.fixture
def reporter(context: DirectoryContext, session: ReportSession) -> Reporter:
    return Reporter(context, session, StaticOutputPolicy(sd_card=False))


@pytest.fixture
def report_file(context: DirectoryContext) -> Path:
    return context.get_dir("testify") / "report.yml"
