"""Progress tracking for host checks."""

import time
from typing import Optional

from rich.console import Console
from rich.progress import (
    Progress,
    BarColumn,
    MofNCompleteColumn,
    TaskProgressColumn,
    TextColumn,
)


class ProgressTracker:
    """Progress bar ticked once per completed host."""

    def __init__(self, console: Console):
        """
        Initialize progress tracker.

        Args:
            console: Rich Console instance
        """
        self.console = console
        self.completed = 0
        self.start_time: Optional[float] = None
        self.task_id: Optional[int] = None

        self.progress = Progress(
            TextColumn("[bold white]Checking domains"),
            MofNCompleteColumn(),
            BarColumn(bar_width=60, complete_style="yellow", finished_style="green"),
            TaskProgressColumn(),
            console=console,
        )

    def start(self, total: int) -> None:
        """Start displaying progress for total hosts."""
        self.start_time = time.time()
        self.progress.start()
        self.task_id = self.progress.add_task("checking", total=total)

    def advance(self) -> None:
        """Mark one host as completed."""
        self.completed += 1
        if self.task_id is not None:
            self.progress.advance(self.task_id, 1)

    def finish(self, total_time: Optional[float] = None) -> None:
        """
        Stop the progress display.

        Args:
            total_time: Total run time in seconds, computed from start() when None
        """
        if total_time is None and self.start_time is not None:
            total_time = time.time() - self.start_time

        self.progress.stop()

        if total_time is not None:
            self.console.print(
                f"\n[bold green]✓[/bold green] Checked {self.completed} host(s) in "
                f"[bold cyan]{total_time:.2f}[/bold cyan] seconds\n"
            )
