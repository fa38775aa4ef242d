from pathlib import Path

import pytest

from screenshot_reporter.core.errors import StorageError
from screenshot_reporter.reporting.storage import DirectoryContext, ReportFileGateway, StaticOutputPolicy


def _gateway(tmp_path: Path, sd_card: bool = False) -> ReportFileGateway:
    context = DirectoryContext(data_dir=tmp_path / "data", external_dir=tmp_path / "sdcard")
    return ReportFileGateway(context, StaticOutputPolicy(sd_card=sd_card))


def test_resolve_path_app_dir(tmp_path: Path) -> None:
    assert _gateway(tmp_path).resolve_path(False) == tmp_path / "data" / "app_testify" / "report.yml"


def test_resolve_path_sd_card(tmp_path: Path) -> None:
    assert _gateway(tmp_path).resolve_path(True) == tmp_path / "sdcard" / "testify" / "report.yml"


def test_report_file_follows_policy(tmp_path: Path) -> None:
    assert _gateway(tmp_path, sd_card=True).report_file() == tmp_path / "sdcard" / "testify" / "report.yml"
    assert _gateway(tmp_path, sd_card=False).report_file() == tmp_path / "data" / "app_testify" / "report.yml"


def test_clear_then_write_replaces_content(tmp_path: Path) -> None:
    gateway = _gateway(tmp_path)
    path = gateway.report_file()

    gateway.write(path, "old\ncontent\n")
    assert gateway.exists(path)
    assert gateway.read_lines(path) == ["old", "content"]

    gateway.clear(path)
    gateway.write(path, "new\n")
    assert gateway.read_lines(path) == ["new"]


def test_write_appends(tmp_path: Path) -> None:
    gateway = _gateway(tmp_path)
    path = gateway.report_file()
    gateway.write(path, "a\n")
    gateway.write(path, "b\n")
    assert path.read_text() == "a\nb\n"


def test_exists_is_false_for_missing_file(tmp_path: Path) -> None:
    gateway = _gateway(tmp_path)
    assert not gateway.exists(gateway.report_file())


def test_read_missing_file_raises_storage_error(tmp_path: Path) -> None:
    gateway = _gateway(tmp_path)
    with pytest.raises(StorageError):
        gateway.read_lines(gateway.report_file())


def test_read_lines_replaces_undecodable_bytes(tmp_path: Path) -> None:
    gateway = _gateway(tmp_path)
    path = gateway.report_file()
    path.parent.mkdir(parents=True)
    path.write_bytes(b"\xff\xfe garbage\n---\n")

    assert gateway.read_lines(path) == ["\ufffd\ufffd garbage", "---"]


def test_io_failures_raise_storage_error(tmp_path: Path) -> None:
    gateway = _gateway(tmp_path)
    path = gateway.report_file()
    path.mkdir(parents=True)

    with pytest.raises(StorageError):
        gateway.clear(path)
    with pytest.raises(StorageError):
        gateway.write(path, "text\n")
