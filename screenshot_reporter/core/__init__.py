"""
Core modules for Screenshot Reporter.
"""

from screenshot_reporter.core.config import Config
from screenshot_reporter.core.errors import (
    ScreenshotReporterError,
    ConfigurationError,
    StorageError,
    ReportParseError,
    ScreenshotTestError,
    ScreenshotIsDifferentError,
    ScreenshotBaselineNotDefinedError,
    RootViewNotFoundError,
    UnexpectedDeviceError,
)
from screenshot_reporter.core.logging import setup_logger, get_logger

__all__ = [
    "Config",
    "ScreenshotReporterError",
    "ConfigurationError",
    "StorageError",
    "ReportParseError",
    "ScreenshotTestError",
    "ScreenshotIsDifferentError",
    "ScreenshotBaselineNotDefinedError",
    "RootViewNotFoundError",
    "UnexpectedDeviceError",
    "setup_logger",
    "get_logger",
]
