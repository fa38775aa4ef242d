"""
Screenshot Reporter Package

Collects screenshot test results into a report.yml that every test of a run
appends to.
"""

__version__ = "0.1.0"

from screenshot_reporter.core.config import Config
from screenshot_reporter.reporting.reporter import Reporter

__all__ = [
    "Config",
    "Reporter",
]
