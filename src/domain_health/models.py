"""Data models for batch domain health checks."""

from dataclasses import dataclass
from typing import Tuple


# Hash shown when the version endpoint could not be reached
UNAVAILABLE_HASH = "--"


@dataclass(frozen=True)
class HostRecord:
    """A single host read from input."""
    host: str  # Fully-qualified domain name
    name: str  # Short label, first DNS label of host

    @classmethod
    def from_line(cls, line: str) -> "HostRecord":
        """Build a record from one input line.

        Args:
            line: Raw input line, surrounding whitespace is ignored

        Returns:
            HostRecord with the short name derived from the first label
        """
        host = line.strip()
        return cls(host=host, name=host.split(".", 1)[0])


@dataclass(frozen=True)
class VersionProbe:
    """Result of the HTTP version check."""
    hash: str = ""
    status_code: int = 0  # 0 if the request could not be sent
    matched: bool = False

    @classmethod
    def unavailable(cls, status_code: int = 0) -> "VersionProbe":
        """Probe used when the version endpoint could not be read."""
        return cls(hash=UNAVAILABLE_HASH, status_code=status_code, matched=False)


@dataclass(frozen=True)
class CheckResult:
    """
    Aggregated outcome of all checks for one host.

    Attributes:
        name: Short host label used for ordering the report
        host: Fully-qualified domain name that was checked
        dns_matched: Whether the DNS records satisfied the DNS pattern
        dns_records: A record lines returned by the resolver
        version: Outcome of the version endpoint probe
    """
    name: str
    host: str
    dns_matched: bool
    dns_records: Tuple[str, ...]
    version: VersionProbe

    @property
    def all_matched(self) -> bool:
        """Both DNS and git dimensions matched."""
        return self.dns_matched and self.version.matched


@dataclass
class Totals:
    """Aggregate OK/NOK counters for the final report."""
    dns_ok: int = 0
    dns_nok: int = 0
    git_ok: int = 0
    git_nok: int = 0

    def record(self, result: CheckResult) -> None:
        """Count one host in exactly one bucket per dimension."""
        if result.dns_matched:
            self.dns_ok += 1
        else:
            self.dns_nok += 1

        if result.version.matched:
            self.git_ok += 1
        else:
            self.git_nok += 1

    @property
    def total(self) -> int:
        return self.dns_ok + self.dns_nok
