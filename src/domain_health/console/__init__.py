"""
Rich console output package for the domain health checker.

This package provides the progress bar, formatted report lines and themed
error output.
"""

from .output import ConsoleManager
from .progress import ProgressTracker
from .themes import get_theme, STATUS_COLORS, ICONS
from .formatters import ResultFormatter

__all__ = [
    'ConsoleManager',
    'ProgressTracker',
    'ResultFormatter',
    'get_theme',
    'STATUS_COLORS',
    'ICONS',
]
