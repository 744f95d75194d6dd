"""
Reporter layer for domain health checks.

Sorts collected results into a deterministic order, prints each host's DNS
and git status, and prints the aggregate totals.
"""

import logging
from typing import List, Sequence

from .config import CheckSettings
from .console.formatters import ResultFormatter
from .console.output import ConsoleManager
from .models import CheckResult, Totals


logger = logging.getLogger(__name__)


class Reporter:
    """
    Reporter for the final batch summary.

    Totals are computed here, in a single pass over the sorted results,
    after all concurrent checks have finished.
    """

    def __init__(
        self,
        results: Sequence[CheckResult],
        settings: CheckSettings,
        console_manager: ConsoleManager = None
    ):
        """
        Initialize the reporter with the collected results.

        Args:
            results: One CheckResult per host, in any order
            settings: Settings of the run (patterns and hide flag)
            console_manager: ConsoleManager instance for Rich output
        """
        self.results = list(results)
        self.settings = settings
        self.console_manager = console_manager or ConsoleManager()
        self.console = self.console_manager.console
        self.formatter = ResultFormatter()

    def sorted_results(self) -> List[CheckResult]:
        """Results ordered by short name, then host."""
        return sorted(self.results, key=lambda r: (r.name, r.host))

    def display(self) -> Totals:
        """
        Print every host and the totals.

        Hosts where both DNS and git matched are skipped when hide_ok is set,
        but they are still counted.

        Returns:
            Totals over all results
        """
        totals = Totals()
        hidden = 0

        for result in self.sorted_results():
            totals.record(result)

            if self.settings.hide_ok and result.all_matched:
                hidden += 1
                continue

            self._display_result(result)

        if hidden:
            logger.debug(f"Hid {hidden} fully matching host(s)")

        self._display_totals(totals)
        return totals

    def _display_result(self, result: CheckResult) -> None:
        self.console.print(self.formatter.format_host_header(result))
        self.console.print(self.formatter.format_dns_line(result, self.settings.dns_regex))
        self.console.print(self.formatter.format_git_line(result, self.settings.git_regex))
        self.console.print()

    def _display_totals(self, totals: Totals) -> None:
        """Print totals for the dimensions that have a pattern configured."""
        if self.settings.dns_pattern:
            self.console.print(self.formatter.format_totals("DNS", totals.dns_ok, totals.dns_nok))
        if self.settings.git_pattern:
            self.console.print(self.formatter.format_totals("Git", totals.git_ok, totals.git_nok))
