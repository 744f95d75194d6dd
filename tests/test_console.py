"""
Tests for console output helpers.
"""

import io

from rich.console import Console

from domain_health.console.output import ConsoleManager
from domain_health.console.progress import ProgressTracker


def make_manager(debug_mode=False):
    buffer = io.StringIO()
    console = Console(file=buffer, width=120, color_system=None)
    return ConsoleManager(debug_mode=debug_mode, console=console), buffer


class TestConsoleManager:
    """Tests for ConsoleManager."""

    def test_banner_only_in_debug_mode(self):
        manager, buffer = make_manager()
        manager.print_banner("0.1.0", dns_pattern="10", git_pattern="", hide_ok=False)
        assert buffer.getvalue() == ""

        manager, buffer = make_manager(debug_mode=True)
        manager.print_banner("0.1.0", dns_pattern="10", git_pattern="", hide_ok=True)

        output = buffer.getvalue()
        assert "domain-health 0.1.0" in output
        assert "(no host passes)" in output

    def test_error_panel_with_details(self):
        manager, buffer = make_manager()

        manager.print_error("Failed to read host list", details={'error_type': 'OSError'})

        output = buffer.getvalue()
        assert "Check aborted" in output
        assert "Failed to read host list" in output
        assert "error type:" in output
        assert "OSError" in output

    def test_traceback_only_in_debug_mode(self):
        try:
            raise RuntimeError("exploded")
        except RuntimeError as e:
            error = e

        manager, buffer = make_manager()
        manager.print_error("exploded", exception=error)
        assert "Traceback" not in buffer.getvalue()

        manager, buffer = make_manager(debug_mode=True)
        manager.print_error("exploded", exception=error)
        assert "Traceback" in buffer.getvalue()

    def test_info_hidden_without_debug(self):
        manager, buffer = make_manager()

        manager.print_info("settings loaded")
        manager.print_warning("TLS [verification] off")

        output = buffer.getvalue()
        assert "settings loaded" not in output
        assert "TLS [verification] off" in output


class TestProgressTracker:
    """Tests for ProgressTracker."""

    def test_counts_completed_hosts(self):
        buffer = io.StringIO()
        tracker = ProgressTracker(Console(file=buffer, width=120, color_system=None))

        tracker.start(3)
        for _ in range(3):
            tracker.advance()
        tracker.finish(1.5)

        assert tracker.completed == 3
        assert "Checked 3 host(s) in 1.50 seconds" in buffer.getvalue()
