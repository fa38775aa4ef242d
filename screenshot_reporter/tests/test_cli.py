import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from screenshot_reporter.cli import app
from screenshot_reporter.tests.samples import BODY_LINES, HEADER_LINES, write_report

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("SCREENSHOT_REPORTER_CONFIG", raising=False)
    monkeypatch.delenv("SCREENSHOT_REPORTER_SESSION_ID", raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    logger = logging.getLogger("screenshot_reporter")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)


def test_path_app_dir(tmp_path: Path) -> None:
    result = runner.invoke(app, ["path", "--data-dir", str(tmp_path / "data")])
    assert result.exit_code == 0
    assert result.output.strip() == str(tmp_path / "data" / "app_testify" / "report.yml")


def test_path_sd_card(tmp_path: Path) -> None:
    result = runner.invoke(app, ["path", "--sd-card", "--external-dir", str(tmp_path / "sdcard")])
    assert result.exit_code == 0
    assert result.output.strip() == str(tmp_path / "sdcard" / "testify" / "report.yml")


def test_show_passing_report(tmp_path: Path) -> None:
    report = tmp_path / "report.yml"
    lines = ["- failed: 0" if line.startswith("- failed:") else line for line in HEADER_LINES]
    write_report(report, lines + BODY_LINES)

    result = runner.invoke(app, ["show", "--file", str(report)])

    assert result.exit_code == 0
    assert "Session: SESSION-ID" in result.output
    assert "ClientDetailsViewScreenshotTest.default [PASS]" in result.output


def test_show_exits_nonzero_when_tests_failed(tmp_path: Path) -> None:
    report = tmp_path / "report.yml"
    write_report(report, HEADER_LINES + BODY_LINES)

    result = runner.invoke(app, ["show", "--file", str(report)])

    assert result.exit_code == 1
    assert "4 total, 3 passed, 1 failed" in result.output


def test_show_missing_report(tmp_path: Path) -> None:
    result = runner.invoke(app, ["show", "--file", str(tmp_path / "missing.yml")])
    assert result.exit_code == 1


def test_show_undecodable_report(tmp_path: Path) -> None:
    report = tmp_path / "report.yml"
    report.write_bytes(b"\xff\xfe garbage\n")

    result = runner.invoke(app, ["show", "--file", str(report)])

    assert result.exit_code == 1
    assert not isinstance(result.exception, UnicodeDecodeError)


def test_clear(tmp_path: Path) -> None:
    report = tmp_path / "report.yml"
    write_report(report, HEADER_LINES + BODY_LINES)

    result = runner.invoke(app, ["clear", "--file", str(report), "--dry-run"])
    assert result.exit_code == 0
    assert report.read_text() != ""

    result = runner.invoke(app, ["clear", "--file", str(report)])
    assert result.exit_code == 0
    assert report.read_text() == ""
