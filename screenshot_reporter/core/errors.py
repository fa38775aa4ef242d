"""
Custom exceptions for Screenshot Reporter.
"""


class ScreenshotReporterError(Exception):
    """Base exception for all Screenshot Reporter errors."""
    pass


class ConfigurationError(ScreenshotReporterError):
    """Raised when configuration is invalid."""
    pass


class StorageError(ScreenshotReporterError):
    """Raised when the report file cannot be read, written or cleared."""
    pass


class ReportParseError(ScreenshotReporterError):
    """Raised when a report header does not have the expected shape."""
    pass


class ScreenshotTestError(ScreenshotReporterError):
    """
    Base class for screenshot test failures with a known cause.

    See ``reporting.models.classify_failure`` for the cause each subclass
    is reported with. Any other exception is reported as ``UNKNOWN``.
    """
    pass


class ScreenshotIsDifferentError(ScreenshotTestError):
    """Raised when the captured screenshot does not match the baseline."""
    pass


class ScreenshotBaselineNotDefinedError(ScreenshotTestError):
    """Raised when no baseline image exists for the test."""
    pass


class RootViewNotFoundError(ScreenshotTestError):
    """Raised when the view under test could not be located."""
    pass


class UnexpectedDeviceError(ScreenshotTestError):
    """Raised when the device does not match the baseline's device key."""
    pass
