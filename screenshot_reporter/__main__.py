"""
Entry point for running screenshot_reporter as a module.

Usage:
    python -m screenshot_reporter [command] [options]
"""

from screenshot_reporter.cli import main

if __name__ == "__main__":
    main()
