"""Console manager for everything printed besides the report itself.

The report lines go through ResultFormatter; this module owns the startup
banner shown in debug mode, warnings, and the panel used when a run aborts.
"""

from typing import Any, Dict, Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.traceback import Traceback

from .themes import get_theme, ICONS


class ConsoleManager:
    """Owns the themed Console shared by the progress bar and the reporter.

    Attributes:
        console: Rich Console instance
        debug_mode: Whether banners, info lines and tracebacks are shown
    """

    def __init__(self, debug_mode: bool = False, console: Optional[Console] = None):
        """
        Args:
            debug_mode: If True, display info messages and stack traces
            console: Console to write to; a themed stdout console is created if omitted
        """
        self.debug_mode = debug_mode
        self.theme = get_theme()
        if console is None:
            console = Console(theme=self.theme, highlight=False)
        else:
            console.push_theme(self.theme)
        self.console = console

    def print_banner(self, version: str, dns_pattern: str, git_pattern: str, hide_ok: bool) -> None:
        """Show the effective patterns before checks start (debug mode only)."""
        if not self.debug_mode:
            return

        grid = Table.grid(padding=(0, 2))
        grid.add_column(style="info")
        grid.add_column()
        grid.add_row("DNS pattern", dns_pattern or "(any record passes)")
        grid.add_row("Git pattern", git_pattern or "(no host passes)")
        grid.add_row("Hide matching", "yes" if hide_ok else "no")

        self.console.print(Panel(
            grid,
            title=f"[bold cyan]domain-health {version}[/bold cyan]",
            border_style="cyan",
            expand=False
        ))

    def print_error(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        exception: Optional[Exception] = None
    ) -> None:
        """Show why the run aborted.

        Args:
            message: What went wrong
            details: Extra key/value context shown under the message
            exception: The exception, rendered as a traceback in debug mode
        """
        parts = [Text(f"{ICONS['error']} {message}", style="error")]

        if details:
            context = Table.grid(padding=(0, 1))
            context.add_column(style="dim")
            context.add_column()
            for key, value in details.items():
                context.add_row(f"{key.replace('_', ' ')}:", str(value))
            parts.extend([Text(), context])

        self.console.print(Panel(Group(*parts), title="[bold red]Check aborted[/bold red]", border_style="red"))

        if self.debug_mode and exception is not None:
            self.console.print(Traceback.from_exception(
                type(exception),
                exception,
                exception.__traceback__,
                width=self.console.width
            ))

    def print_warning(self, message: str) -> None:
        self.console.print(f"{ICONS['warning']} {message}", style="warning", markup=False)

    def print_info(self, message: str) -> None:
        """Print message in debug mode only."""
        if self.debug_mode:
            self.console.print(f"{ICONS['info']} {message}", style="info", markup=False)
