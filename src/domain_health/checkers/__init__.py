"""
Checker modules for domain health checks.

Each checker module implements one per-host check.
"""

from .base_checker import BaseChecker
from .dns import DigResolver, DNSPythonResolver, build_resolver, match_records
from .version import VersionChecker
from .pwa import PWAHashExtractor

__all__ = [
    'BaseChecker',
    'DigResolver',
    'DNSPythonResolver',
    'build_resolver',
    'match_records',
    'VersionChecker',
    'PWAHashExtractor',
]
