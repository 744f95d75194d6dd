"""
Host prober for domain health checks.

Runs the DNS and version checks for one host and folds them into a single
CheckResult. A prober never fails a host check by raising: every failure
ends up in the result fields.
"""

import asyncio
import logging
import time
from typing import Optional

import aiohttp

from .checkers.base_checker import BaseChecker
from .checkers.dns import build_resolver, match_records
from .checkers.version import VersionChecker
from .config import CheckSettings
from .models import CheckResult, HostRecord, VersionProbe

logger = logging.getLogger(__name__)


class HostProber:
    """
    Checks a single host against the configured DNS and git patterns.

    One prober is shared by every concurrent host check; it holds no
    per-host state.
    """

    def __init__(
        self,
        settings: CheckSettings,
        resolver: Optional[BaseChecker] = None,
        version_checker: Optional[VersionChecker] = None
    ):
        """
        Initialize the prober.

        Args:
            settings: Patterns and timeouts for this run
            resolver: DNS resolver, built from settings.resolver when omitted
            version_checker: Version checker, built from settings when omitted
        """
        self.settings = settings
        self.resolver = resolver or build_resolver(settings.resolver, settings.dns_timeout)
        self.version_checker = version_checker or VersionChecker(
            timeout=settings.http_timeout,
            git_pattern=settings.git_regex,
            version_path=settings.version_path
        )

    async def probe(self, record: HostRecord, session: aiohttp.ClientSession) -> CheckResult:
        """
        Resolve DNS and probe the version endpoint of one host.

        The two checks are independent and run concurrently.

        Args:
            record: The host to check
            session: Shared HTTP session

        Returns:
            CheckResult for the host
        """
        logger.debug(f"Starting checks for host: {record.host}")
        start_time = time.time()

        records, version = await asyncio.gather(
            self.resolver.check(record.host),
            self.version_checker.check(record.host, session=session),
            return_exceptions=True
        )

        # A failing check only degrades its own field
        if isinstance(records, BaseException):
            records = self._absorb(record.host, 'DNS', records, [])
        if isinstance(version, BaseException):
            version = self._absorb(record.host, 'version', version, VersionProbe.unavailable())

        dns_records = tuple(records)
        result = CheckResult(
            name=record.name,
            host=record.host,
            dns_matched=match_records(dns_records, self.settings.dns_regex),
            dns_records=dns_records,
            version=version
        )

        logger.debug(
            f"Completed checks for {record.host} in {time.time() - start_time:.2f}s: "
            f"dns_matched={result.dns_matched}, hash={version.hash!r}, "
            f"code={version.status_code}, git_matched={version.matched}"
        )
        return result

    @staticmethod
    def _absorb(host: str, check: str, error: BaseException, fallback):
        """Log a failed sub-check and return its degraded value; cancellation propagates."""
        if not isinstance(error, Exception):
            raise error
        error_msg = str(error) if str(error) else f"{type(error).__name__} occurred"
        logger.error(f"{check} check failed for {host}: {error_msg}", exc_info=error)
        return fallback

    def failed_result(self, record: HostRecord) -> CheckResult:
        """
        Result for a host whose checks could not be completed.

        Args:
            record: The host that failed

        Returns:
            CheckResult with no DNS records and an unavailable version
        """
        return CheckResult(
            name=record.name,
            host=record.host,
            dns_matched=match_records((), self.settings.dns_regex),
            dns_records=(),
            version=VersionProbe.unavailable()
        )
