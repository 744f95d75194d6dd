"""Theme configuration for Rich console output.

This module defines the colors and icons used by the report, the progress
bar and error panels.
"""

from rich.theme import Theme

# Status color mappings
STATUS_COLORS = {
    'OK': 'bold bright_green',
    'NOK': 'bold bright_red',
}

# Unicode icons for various status indicators
ICONS = {
    'error': '✗',
    'warning': '⚠',
    'info': 'ℹ',
}


def get_theme() -> Theme:
    """Get the Rich theme with custom styles.

    Returns:
        Theme: Rich Theme object with custom style definitions
    """
    return Theme({
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "host_name": "bold bright_white",
        "context": "bright_black",
        "match": "bold color(229)",
        "ok_count": "bright_green",
        "nok_count": "bright_red",
    })
