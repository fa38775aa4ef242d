"""
Report file location and raw file access.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Protocol, Union

from screenshot_reporter.core.errors import StorageError
from screenshot_reporter.core.logging import get_logger

REPORT_DIR_NAME = "testify"
REPORT_FILE_NAME = "report.yml"

logger = get_logger(__name__)


class OutputPolicy(Protocol):
    """Decides whether output goes to shared external storage."""

    def use_sd_card(self) -> bool:
        ...


class StorageContext(Protocol):
    """Host accessor for the app-private and external storage directories."""

    def get_dir(self, name: str) -> Path:
        ...

    def get_external_files_dir(self) -> Path:
        ...


@dataclass
class StaticOutputPolicy:
    """OutputPolicy with a fixed answer, usually taken from Config."""
    sd_card: bool = False

    def use_sd_card(self) -> bool:
        return self.sd_card


@dataclass
class DirectoryContext:
    """
    StorageContext over plain directories.

    ``get_dir(name)`` follows the Android convention of ``app_<name>``
    directories under the application's data directory.
    """
    data_dir: Path
    external_dir: Path

    def get_dir(self, name: str) -> Path:
        return Path(self.data_dir) / f"app_{name}"

    def get_external_files_dir(self) -> Path:
        return Path(self.external_dir)


class ReportFileGateway:
    """Resolve the report file and read, write and clear it as text lines."""

    def __init__(self, context: StorageContext, policy: OutputPolicy, encoding: str = "utf-8"):
        self.context = context
        self.policy = policy
        self.encoding = encoding

    def resolve_path(self, use_sd_card: bool) -> Path:
        """
        Location of the report file.

        Args:
            use_sd_card: Put the report under shared external storage

        Returns:
            ``<external>/testify/report.yml`` or ``<app dir>/report.yml``
        """
        if use_sd_card:
            return self.context.get_external_files_dir() / REPORT_DIR_NAME / REPORT_FILE_NAME
        return self.context.get_dir(REPORT_DIR_NAME) / REPORT_FILE_NAME

    def report_file(self) -> Path:
        return self.resolve_path(self.policy.use_sd_card())

    def exists(self, path: Union[str, Path]) -> bool:
        return Path(path).is_file()

    def read_lines(self, path: Union[str, Path]) -> List[str]:
        """Lines of the report; undecodable bytes become U+FFFD."""
        try:
            with open(path, 'r', encoding=self.encoding, errors='replace') as f:
                return f.read().splitlines()
        except OSError as e:
            logger.error(f"Could not read report {path}: {e}")
            raise StorageError(f"Failed to read report file {path}: {e}") from e

    def write(self, path: Union[str, Path], text: str) -> None:
        """Append ``text`` to the report, creating missing directories."""
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'a', encoding=self.encoding) as f:
                f.write(text)
        except OSError as e:
            logger.error(f"Could not write report {path}: {e}")
            raise StorageError(f"Failed to write report file {path}: {e}") from e

    def clear(self, path: Union[str, Path]) -> None:
        """Truncate the report to zero length, creating it if needed."""
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding=self.encoding):
                pass
        except OSError as e:
            logger.error(f"Could not clear report {path}: {e}")
            raise StorageError(f"Failed to clear report file {path}: {e}") from e
