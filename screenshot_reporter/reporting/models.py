"""
Data models for screenshot test reporting.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from screenshot_reporter.core.errors import (
    RootViewNotFoundError,
    ScreenshotBaselineNotDefinedError,
    ScreenshotIsDifferentError,
    UnexpectedDeviceError,
)


class TestStatus(Enum):
    """Outcome of a single screenshot test."""
    __test__ = False

    PENDING = "PENDING"
    PASS = "PASS"
    FAIL = "FAIL"


class FailureCause(Enum):
    """Why a screenshot test failed."""
    UNKNOWN = "UNKNOWN"
    SCREENSHOT_MISMATCH = "SCREENSHOT_MISMATCH"
    NO_BASELINE = "NO_BASELINE"
    ROOT_VIEW_NOT_FOUND = "ROOT_VIEW_NOT_FOUND"
    WRONG_DEVICE = "WRONG_DEVICE"


_CAUSES = (
    (ScreenshotIsDifferentError, FailureCause.SCREENSHOT_MISMATCH),
    (ScreenshotBaselineNotDefinedError, FailureCause.NO_BASELINE),
    (RootViewNotFoundError, FailureCause.ROOT_VIEW_NOT_FOUND),
    (UnexpectedDeviceError, FailureCause.WRONG_DEVICE),
)


def classify_failure(error: BaseException) -> FailureCause:
    """Return the reported cause for ``error``, ``UNKNOWN`` if unrecognized."""
    for error_type, cause in _CAUSES:
        if isinstance(error, error_type):
            return cause
    return FailureCause.UNKNOWN


@dataclass
class TestRecord:
    """The test currently being reported on."""
    __test__ = False

    test_name: str
    class_name: str
    package_name: str
    baseline_image_path: Optional[str] = None
    test_image_path: Optional[str] = None
    status: TestStatus = TestStatus.PENDING
    cause: Optional[FailureCause] = None
    description: Optional[str] = None

    def mark_passed(self) -> None:
        self.status = TestStatus.PASS
        self.cause = None
        self.description = None

    def mark_failed(self, cause: FailureCause, description: str) -> None:
        self.status = TestStatus.FAIL
        self.cause = cause
        self.description = description

