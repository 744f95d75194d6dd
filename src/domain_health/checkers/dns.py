"""
DNS resolvers for domain health checks.

Resolves A records for a host either through the external ``dig`` utility
or through dnspython. Both return the answer lines as strings and degrade
to an empty list on any failure.
"""

import asyncio
import logging
import time
from typing import List, Optional, Pattern, Sequence

import dns.exception
import dns.resolver

from .base_checker import BaseChecker

logger = logging.getLogger(__name__)


def split_answer_lines(output: str) -> List[str]:
    """Split raw resolver output into lines, dropping empty ones."""
    return [line for line in output.split("\n") if line.strip()]


def match_records(records: Sequence[str], pattern: Optional[Pattern]) -> bool:
    """
    Decide whether DNS records satisfy the configured pattern.

    Without a pattern every host passes. Otherwise the first record the
    pattern is found in decides the match.

    Args:
        records: DNS answer lines
        pattern: Compiled DNS pattern or None

    Returns:
        True if no pattern is configured or any record matches
    """
    if pattern is None:
        return True

    for record in records:
        if pattern.search(record):
            return True

    return False


class DigResolver(BaseChecker):
    """
    Resolver that shells out to ``dig A +short <host>``.

    The subprocess is bounded by the checker timeout; a hung query is
    killed and treated as returning no records.
    """

    DIG_COMMAND = 'dig'

    async def check(self, host: str, **kwargs) -> List[str]:
        """
        Resolve A records for the host.

        Args:
            host: The host name to resolve
            **kwargs: Additional parameters (unused)

        Returns:
            Non-empty answer lines, or an empty list if the query failed
        """
        start_time = time.time()
        logger.debug(f"Running {self.DIG_COMMAND} A +short {host}")

        try:
            output = await self._run_query(host)
        except asyncio.TimeoutError:
            logger.warning(f"DNS query for {host} timed out after {self.timeout}s")
            return []
        except FileNotFoundError:
            logger.warning(f"DNS query for {host} failed: '{self.DIG_COMMAND}' executable not found")
            return []
        except (OSError, RuntimeError) as e:
            logger.warning(f"DNS query for {host} failed: {str(e)}")
            return []

        records = split_answer_lines(output)
        logger.debug(f"A records for {host}: {records} (took {time.time() - start_time:.3f}s)")
        return records

    async def _run_query(self, host: str) -> str:
        """
        Run the dig subprocess and return its decoded standard output.

        Args:
            host: The host name to resolve

        Returns:
            Raw standard output of dig

        Raises:
            asyncio.TimeoutError: If dig does not finish within the timeout
            FileNotFoundError: If dig is not installed
            RuntimeError: If dig exits with a non-zero status
        """
        process = await asyncio.create_subprocess_exec(
            self.DIG_COMMAND, 'A', '+short', host,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise

        if process.returncode != 0:
            message = stderr.decode('utf-8', errors='replace').strip()
            raise RuntimeError(
                f"{self.DIG_COMMAND} exited with status {process.returncode}"
                + (f": {message}" if message else "")
            )

        return stdout.decode('utf-8', errors='replace')


class DNSPythonResolver(BaseChecker):
    """Resolver that queries A records with dnspython instead of dig."""

    async def check(self, host: str, **kwargs) -> List[str]:
        """
        Resolve A records for the host.

        Args:
            host: The host name to resolve
            **kwargs: Additional parameters (unused)

        Returns:
            A record addresses, or an empty list if the query failed
        """
        try:
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, self._query_sync, host)

        except dns.resolver.NXDOMAIN:
            logger.warning(f"DNS query for {host} failed: domain does not exist")
            return []
        except dns.resolver.NoAnswer:
            # No A records, not a failure
            return []
        except dns.resolver.NoNameservers:
            logger.warning(f"DNS query for {host} failed: all nameservers failed")
            return []
        except dns.exception.Timeout:
            logger.warning(f"DNS query for {host} timed out after {self.timeout}s")
            return []
        except dns.exception.DNSException as e:
            logger.warning(f"DNS query for {host} failed: {str(e)}")
            return []

    def _query_sync(self, host: str) -> List[str]:
        """
        Synchronous helper to query A records (runs in thread pool).

        Args:
            host: The host name to resolve

        Returns:
            List of A record values as strings
        """
        resolver = dns.resolver.Resolver()
        resolver.timeout = self.timeout
        resolver.lifetime = self.timeout

        answers = resolver.resolve(host, 'A')
        return [answer.to_text() for answer in answers]


def build_resolver(name: str, timeout: float) -> BaseChecker:
    """
    Create the resolver for a backend name.

    Args:
        name: 'dig' or 'dnspython'
        timeout: Query timeout in seconds

    Returns:
        Resolver instance

    Raises:
        ValueError: If the backend name is unknown
    """
    if name == 'dig':
        return DigResolver(timeout=timeout)
    if name == 'dnspython':
        return DNSPythonResolver(timeout=timeout)
    raise ValueError(f"Unknown resolver '{name}'")
