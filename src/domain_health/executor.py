"""
Executor layer for domain health checks.

Reads hosts, fans out one concurrent check per host, and joins on a
bounded result queue until every dispatched host has reported back.
"""

import asyncio
import logging
import time
from typing import Iterable, Iterator, List, Optional, TextIO, TYPE_CHECKING

import aiohttp

from .checkers.http import create_session
from .config import CheckSettings
from .models import CheckResult, HostRecord
from .prober import HostProber

if TYPE_CHECKING:
    from .console.progress import ProgressTracker


logger = logging.getLogger(__name__)


class InputStreamError(Exception):
    """The host list could not be read."""


def read_hosts(stream: TextIO) -> Iterator[HostRecord]:
    """
    Yield one HostRecord per non-blank line of the stream until EOF.

    Args:
        stream: Text stream with one fully-qualified host name per line

    Yields:
        HostRecord for each host

    Raises:
        InputStreamError: If reading the stream fails
    """
    try:
        for line in stream:
            if not line.strip():
                continue
            yield HostRecord.from_line(line)
    except (OSError, UnicodeDecodeError) as e:
        raise InputStreamError(f"Failed to read host list: {str(e)}") from e


class Dispatcher:
    """
    Launches one task per host.

    Every task puts exactly one CheckResult on the result queue, whether
    the probe succeeded or not.
    """

    def __init__(
        self,
        prober: HostProber,
        session: aiohttp.ClientSession,
        queue: asyncio.Queue,
        max_concurrency: Optional[int] = None
    ):
        """
        Initialize the dispatcher.

        Args:
            prober: Prober shared by all host tasks
            session: HTTP session shared by all host tasks
            queue: Bounded queue receiving one result per host
            max_concurrency: Optional cap on hosts probed at once, unbounded if None or 0
        """
        self.prober = prober
        self.session = session
        self.queue = queue
        self.tasks: List[asyncio.Task] = []
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    def dispatch(self, records: Iterable[HostRecord]) -> int:
        """
        Start a check task for each record.

        Args:
            records: Hosts to check; may be a lazy stream reader

        Returns:
            Number of tasks dispatched by this call

        Raises:
            InputStreamError: If the record source fails while being read
        """
        count = 0
        for record in records:
            self.tasks.append(asyncio.create_task(self._run(record), name=f"probe:{record.host}"))
            count += 1

        return count

    async def cancel(self) -> None:
        """Cancel every dispatched task and wait for them to finish."""
        for task in self.tasks:
            task.cancel()
        await asyncio.gather(*self.tasks, return_exceptions=True)

    async def _run(self, record: HostRecord) -> None:
        if self._semaphore is None:
            result = await self._safe_probe(record)
        else:
            async with self._semaphore:
                result = await self._safe_probe(record)

        await self.queue.put(result)

    async def _safe_probe(self, record: HostRecord) -> CheckResult:
        """Probe a host, turning unexpected failures into a failed result."""
        try:
            return await self.prober.probe(record, self.session)
        except Exception as e:
            error_msg = str(e) if str(e) else f"{type(e).__name__} occurred"
            logger.error(f"Checks failed for {record.host}: {error_msg}", exc_info=True)
            return self.prober.failed_result(record)


class Collector:
    """Drains results from the queue in arrival order."""

    def __init__(self, queue: asyncio.Queue, progress: Optional['ProgressTracker'] = None):
        self.queue = queue
        self.progress = progress

    async def collect(self, count: int) -> List[CheckResult]:
        """
        Wait for exactly count results.

        Args:
            count: Number of dispatched hosts

        Returns:
            Results in the order they arrived
        """
        results: List[CheckResult] = []

        while len(results) < count:
            result = await self.queue.get()
            self.queue.task_done()
            results.append(result)

            if self.progress:
                self.progress.advance()

        return results


class HealthCheckExecutor:
    """
    Runs the dispatch and collect phases for a batch of hosts.

    Results are returned unsorted; ordering is the reporter's job.
    """

    def __init__(
        self,
        settings: CheckSettings,
        prober: Optional[HostProber] = None,
        progress: Optional['ProgressTracker'] = None
    ):
        """
        Initialize the executor.

        Args:
            settings: Settings for this run
            prober: Host prober, built from settings when omitted
            progress: Optional progress tracker ticked once per host
        """
        self.settings = settings
        self.prober = prober or HostProber(settings)
        self.progress = progress

    async def execute_all(
        self,
        records: Iterable[HostRecord],
        session: Optional[aiohttp.ClientSession] = None
    ) -> List[CheckResult]:
        """
        Check every host and return one result per host.

        Args:
            records: Hosts to check
            session: HTTP session to use; a session owned by this call is
                created from settings when omitted

        Returns:
            List of CheckResult objects, one per dispatched host

        Raises:
            InputStreamError: If the host source fails; tasks already
                dispatched are cancelled first
        """
        start_time = time.time()
        owns_session = session is None
        if owns_session:
            session = create_session(self.settings.http_timeout, self.settings.verify_ssl)

        try:
            queue: asyncio.Queue = asyncio.Queue(maxsize=self.settings.queue_size)
            dispatcher = Dispatcher(
                self.prober,
                session,
                queue,
                max_concurrency=self.settings.max_concurrency
            )

            try:
                count = dispatcher.dispatch(records)
            except InputStreamError:
                logger.error(f"Input failed after dispatching {len(dispatcher.tasks)} host(s)")
                await dispatcher.cancel()
                raise

            logger.info(f"Dispatched checks for {count} host(s)")

            if self.progress:
                self.progress.start(count)

            results = await Collector(queue, self.progress).collect(count)

            # Every task has delivered its result; join them before returning
            await asyncio.gather(*dispatcher.tasks)

        finally:
            if owns_session:
                await session.close()

        total_time = time.time() - start_time

        if self.progress:
            self.progress.finish(total_time)

        logger.info(f"Completed all checks in {total_time:.2f}s")

        return results
