"""
Domain Health Checker

Batch checker that resolves DNS records and probes the deployed build hash
of every host read from standard input, then reports OK/NOK per host.
"""

__version__ = "0.1.0"

from .models import HostRecord, VersionProbe, CheckResult, Totals
from .config import CheckSettings, load_settings, validate_settings
from .prober import HostProber
from .executor import HealthCheckExecutor, InputStreamError, read_hosts
from .reporter import Reporter
from .main import main

__all__ = [
    'HostRecord',
    'VersionProbe',
    'CheckResult',
    'Totals',
    'CheckSettings',
    'load_settings',
    'validate_settings',
    'HostProber',
    'HealthCheckExecutor',
    'InputStreamError',
    'read_hosts',
    'Reporter',
    'main',
]
