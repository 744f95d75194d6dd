"""
CLI entry point for the domain health checker.

Reads host names from standard input, checks every host concurrently and
prints a sorted report with DNS and git totals.

    cat hosts.txt | domain-health --dns '10\\.0\\.' --git '^4f2a'
"""

import asyncio
import logging
import sys
from typing import Optional

import click

from . import __version__
from .config import (
    CheckSettings,
    VALID_RESOLVERS,
    apply_overrides,
    load_settings,
)
from .console.output import ConsoleManager
from .console.progress import ProgressTracker
from .executor import HealthCheckExecutor, InputStreamError, read_hosts
from .reporter import Reporter


# Configure module logger
logger = logging.getLogger(__name__)


def setup_logging(log_level: str, debug_mode: bool = False, log_file: str = 'domain-health.log') -> None:
    """
    Configure logging with specified level and debug mode.

    Everything at log_level and above goes to the log file. The console
    only receives log records in debug mode, so normal runs print nothing
    but the report.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        debug_mode: If True, also display logs on the console
        log_file: Path of the log file
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()

    # Drop handlers from an earlier invocation in the same process
    for handler in root_logger.handlers[:]:
        if getattr(handler, 'domain_health', False):
            root_logger.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(numeric_level)
    file_handler.setFormatter(formatter)
    file_handler.domain_health = True

    console_handler = logging.StreamHandler()
    if debug_mode:
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
    else:
        console_handler.setLevel(logging.CRITICAL + 1)  # Suppress all logs
    console_handler.domain_health = True

    root_logger.setLevel(numeric_level)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger.info(f"Logging initialized at {log_level} level (debug_mode={debug_mode})")


def build_settings(
    config_file: Optional[str],
    dns_pattern: Optional[str],
    git_pattern: Optional[str],
    hide_ok: bool,
    http_timeout: Optional[float],
    dns_timeout: Optional[float],
    max_concurrency: Optional[int],
    resolver: Optional[str],
    insecure: bool
) -> CheckSettings:
    """
    Merge settings file values with command-line options.

    Options given on the command line win over the settings file.

    Raises:
        click.ClickException: If the settings file cannot be loaded
        click.UsageError: If the merged settings are invalid
    """
    if config_file:
        try:
            base = load_settings(config_file)
        except (FileNotFoundError, ValueError) as e:
            raise click.ClickException(f"Settings error: {str(e)}")
        logger.info(f"Loaded settings from: {config_file}")
    else:
        base = CheckSettings()

    try:
        return apply_overrides(
            base,
            dns_pattern=dns_pattern,
            git_pattern=git_pattern,
            hide_ok=True if hide_ok else None,
            http_timeout=http_timeout,
            dns_timeout=dns_timeout,
            max_concurrency=max_concurrency,
            resolver=resolver,
            verify_ssl=False if insecure else None
        )
    except ValueError as e:
        raise click.UsageError(str(e))


@click.command(name='domain-health')
@click.option(
    '--dns', 'dns_pattern',
    type=str,
    default=None,
    help='Regex matched against DNS A records (empty: every host passes)'
)
@click.option(
    '--git', 'git_pattern',
    type=str,
    default=None,
    help='Regex matched against the version hash (empty: no host matches)'
)
@click.option(
    '--hide', 'hide_ok',
    is_flag=True,
    default=False,
    help='Hide hosts with matching DNS and git (they are still counted)'
)
@click.option(
    '-c', '--config', 'config_file',
    type=click.Path(exists=True),
    help='Settings file (YAML/JSON)'
)
@click.option(
    '--timeout', 'http_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='HTTP request timeout in seconds (default: 15)'
)
@click.option(
    '--dns-timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='DNS query timeout in seconds (default: 10)'
)
@click.option(
    '--max-concurrency',
    type=click.IntRange(min=0),
    default=None,
    help='Maximum hosts checked at once (default: 0, unbounded)'
)
@click.option(
    '--resolver',
    type=click.Choice(sorted(VALID_RESOLVERS)),
    default=None,
    help='DNS backend (default: dig)'
)
@click.option(
    '--insecure',
    is_flag=True,
    default=False,
    help='Do not verify TLS certificates'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Logging level (default: INFO)'
)
@click.option(
    '--log-file',
    type=click.Path(dir_okay=False),
    default='domain-health.log',
    help='Log file path (default: domain-health.log)'
)
@click.option(
    '--debug',
    is_flag=True,
    default=False,
    help='Enable debug mode with verbose console output'
)
@click.version_option(__version__, prog_name='domain-health')
def cli(
    dns_pattern: Optional[str],
    git_pattern: Optional[str],
    hide_ok: bool,
    config_file: Optional[str],
    http_timeout: Optional[float],
    dns_timeout: Optional[float],
    max_concurrency: Optional[int],
    resolver: Optional[str],
    insecure: bool,
    log_level: str,
    log_file: str,
    debug: bool
) -> None:
    """
    Check DNS records and deployed versions of the hosts read from stdin.

    Each line of standard input is one fully-qualified host name. For every
    host the A records are resolved and https://<host>/git is probed for
    the deployed build hash.

    Examples:

        # Only list hosts, no filters
        cat hosts.txt | domain-health

        # Hosts must point at 10.0.0.x and run build 4f2a...
        cat hosts.txt | domain-health --dns '10\\.0\\.0\\.' --git '^4f2a'

        # Show only the hosts that need attention
        cat hosts.txt | domain-health --dns '10\\.0\\.0\\.' --git '^4f2a' --hide
    """
    setup_logging(log_level, debug_mode=debug, log_file=log_file)

    console_manager = ConsoleManager(debug_mode=debug)

    settings = build_settings(
        config_file,
        dns_pattern,
        git_pattern,
        hide_ok,
        http_timeout,
        dns_timeout,
        max_concurrency,
        resolver,
        insecure
    )

    console_manager.print_banner(
        version=__version__,
        dns_pattern=settings.dns_pattern,
        git_pattern=settings.git_pattern,
        hide_ok=settings.hide_ok
    )
    if config_file:
        console_manager.print_info(f"Settings loaded from {config_file}")
    if not settings.verify_ssl:
        console_manager.print_warning("TLS certificate verification is disabled")

    try:
        stream = click.get_text_stream('stdin')
        executor = HealthCheckExecutor(
            settings,
            progress=ProgressTracker(console_manager.console)
        )

        console_manager.console.print()
        results = asyncio.run(executor.execute_all(read_hosts(stream)))

        Reporter(results, settings, console_manager=console_manager).display()

        logger.info("Health check completed successfully")

    except InputStreamError as e:
        logger.error(str(e), exc_info=True)
        console_manager.print_error(
            str(e),
            details={'error_type': type(e.__cause__ or e).__name__},
            exception=e
        )
        sys.exit(1)

    except Exception as e:
        error_msg = str(e) if str(e) else f"{type(e).__name__} occurred"
        logger.error(f"Unexpected error: {error_msg}", exc_info=True)
        console_manager.print_error(
            error_msg,
            details={
                'error_type': type(e).__name__,
                'log_file': log_file
            },
            exception=e
        )
        sys.exit(1)


def main() -> None:
    """Entry point for CLI."""
    cli()


if __name__ == '__main__':
    main()
