"""Result formatters for Rich console output.

This module provides the ResultFormatter class with static methods for
turning host check results into Rich Text lines.
"""

from typing import Optional, Pattern

from rich.text import Text

from ..models import CheckResult
from .themes import STATUS_COLORS


class ResultFormatter:
    """Formatter for host check results.

    All dynamic values (records, hashes) are appended as plain text so that
    brackets in them are never read as console markup.
    """

    @staticmethod
    def format_status(ok: bool) -> Text:
        """Render an OK/NOK badge such as ``[OK]``."""
        label = 'OK' if ok else 'NOK'
        return Text.assemble("[", (label, STATUS_COLORS[label]), "]")

    @staticmethod
    def highlight(value: str, pattern: Optional[Pattern]) -> Text:
        """Dim a value and emphasise every non-empty match of pattern in it.

        Args:
            value: Plain string to render
            pattern: Compiled pattern, or None to leave the value unstyled

        Returns:
            Text with match spans styled
        """
        if pattern is None:
            return Text(value)

        text = Text(value, style="context")
        for match in pattern.finditer(value):
            start, end = match.span()
            if end > start:
                text.stylize("match", start, end)
        return text

    @staticmethod
    def format_host_header(result: CheckResult) -> Text:
        """Render ``<name> > https://<host>``."""
        return Text.assemble((result.name, "host_name"), f" > https://{result.host}")

    @staticmethod
    def format_dns_line(result: CheckResult, pattern: Optional[Pattern]) -> Text:
        """Render the DNS status line of a host."""
        records = ", ".join(result.dns_records)
        line = Text("   DNS: ")
        line.append_text(ResultFormatter.format_status(result.dns_matched))
        line.append(" ")
        if result.dns_matched:
            line.append_text(ResultFormatter.highlight(records, pattern))
        else:
            line.append(records)
        return line

    @staticmethod
    def format_git_line(result: CheckResult, pattern: Optional[Pattern]) -> Text:
        """Render the git status line of a host."""
        version = result.version
        line = Text("   git: ")
        line.append_text(ResultFormatter.format_status(version.matched))
        line.append(" ")
        if version.matched:
            line.append_text(ResultFormatter.highlight(version.hash, pattern))
            line.append(f" code: {version.status_code}", style="context")
        else:
            line.append(f"{version.hash} code: {version.status_code}")
        return line

    @staticmethod
    def format_totals(label: str, ok: int, nok: int) -> Text:
        """Render `` <label> OK: [NN], NOK: [NN]``."""
        return Text.assemble(
            f" {label} OK: [",
            (f"{ok:02d}", "ok_count"),
            "], NOK: [",
            (f"{nok:02d}", "nok_count"),
            "]"
        )
