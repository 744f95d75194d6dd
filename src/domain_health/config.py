"""Configuration management for domain health checks."""

import json
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Pattern

import yaml


# Supported DNS resolver backends
VALID_RESOLVERS = {'dig', 'dnspython'}

# Settings that may be provided in a settings file, with their accepted types
SETTINGS_FIELD_TYPES = {
    'dns_pattern': (str,),
    'git_pattern': (str,),
    'hide_ok': (bool,),
    'http_timeout': (int, float),
    'dns_timeout': (int, float),
    'max_concurrency': (int,),
    'queue_size': (int,),
    'resolver': (str,),
    'verify_ssl': (bool,),
    'version_path': (str,),
}


@dataclass
class CheckSettings:
    """Settings shared by every host check in a run."""

    dns_pattern: str = ""
    git_pattern: str = ""
    hide_ok: bool = False
    http_timeout: float = 15.0
    dns_timeout: float = 10.0
    max_concurrency: Optional[int] = None
    queue_size: int = 10
    resolver: str = 'dig'
    verify_ssl: bool = True
    version_path: str = '/git'

    _dns_regex: Optional[Pattern] = field(default=None, init=False, repr=False, compare=False)
    _git_regex: Optional[Pattern] = field(default=None, init=False, repr=False, compare=False)

    @property
    def dns_regex(self) -> Optional[Pattern]:
        """Compiled DNS pattern, None when no DNS filter is configured."""
        if not self.dns_pattern:
            return None
        if self._dns_regex is None or self._dns_regex.pattern != self.dns_pattern:
            self._dns_regex = re.compile(self.dns_pattern)
        return self._dns_regex

    @property
    def git_regex(self) -> Optional[Pattern]:
        """Compiled git pattern, None when no git pattern is configured."""
        if not self.git_pattern:
            return None
        if self._git_regex is None or self._git_regex.pattern != self.git_pattern:
            self._git_regex = re.compile(self.git_pattern)
        return self._git_regex


def validate_settings(settings: CheckSettings) -> None:
    """
    Validate check settings.

    Args:
        settings: CheckSettings to validate

    Raises:
        ValueError: If validation fails with descriptive error message
    """
    for label, pattern in (('DNS', settings.dns_pattern), ('git', settings.git_pattern)):
        if not pattern:
            continue
        try:
            re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid {label} pattern '{pattern}': {e}")

    if settings.http_timeout <= 0:
        raise ValueError(f"HTTP timeout must be positive, got {settings.http_timeout}")

    if settings.dns_timeout <= 0:
        raise ValueError(f"DNS timeout must be positive, got {settings.dns_timeout}")

    # None or 0 leaves fan-out unbounded
    if settings.max_concurrency is not None and settings.max_concurrency < 0:
        raise ValueError(
            f"max_concurrency cannot be negative, got {settings.max_concurrency}"
        )

    if settings.queue_size < 1:
        raise ValueError(f"queue_size must be at least 1, got {settings.queue_size}")

    if settings.resolver not in VALID_RESOLVERS:
        raise ValueError(
            f"Invalid resolver '{settings.resolver}'. "
            f"Valid resolvers are: {', '.join(sorted(VALID_RESOLVERS))}"
        )

    if not settings.version_path.startswith('/'):
        raise ValueError(f"version_path must start with '/', got '{settings.version_path}'")


def load_settings(file_path: str) -> CheckSettings:
    """
    Load and parse a settings file (YAML or JSON).

    Expected YAML format:
        dns_pattern: '10\\.0\\.'
        git_pattern: '^abc'
        http_timeout: 15
        dns_timeout: 10
        max_concurrency: 50  # Optional, unbounded when omitted
        resolver: dig

    Args:
        file_path: Path to settings file

    Returns:
        Parsed and validated CheckSettings object

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is invalid or parsing fails
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {file_path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()

        if path.suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(content)
        elif path.suffix == '.json':
            data = json.loads(content)
        else:
            raise ValueError(f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json")

        if data is None:
            raise ValueError("Settings file is empty")

        if not isinstance(data, dict):
            raise ValueError("Settings file must contain an object/dictionary")

        settings = CheckSettings(**_parse_settings(data))
        validate_settings(settings)

        return settings

    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax: {str(e)}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON syntax at line {e.lineno}, column {e.colno}: {e.msg}")
    except Exception as e:
        if isinstance(e, (FileNotFoundError, ValueError)):
            raise
        raise ValueError(f"Failed to parse settings file: {str(e)}")


def _parse_settings(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check keys and value types of raw settings data.

    Args:
        data: Dictionary loaded from a settings file

    Returns:
        Keyword arguments for CheckSettings

    Raises:
        ValueError: If a key is unknown or a value has the wrong type
    """
    parsed = {}
    for key, value in data.items():
        if key not in SETTINGS_FIELD_TYPES:
            raise ValueError(
                f"Unknown setting '{key}'. "
                f"Valid settings are: {', '.join(sorted(SETTINGS_FIELD_TYPES))}"
            )

        if value is None:
            if key == 'max_concurrency':
                parsed[key] = None
                continue
            raise ValueError(f"'{key}' cannot be null")

        expected = SETTINGS_FIELD_TYPES[key]
        # bool is a subclass of int
        if not isinstance(value, expected) or (isinstance(value, bool) and bool not in expected):
            type_names = ' or '.join(t.__name__ for t in expected)
            raise ValueError(f"'{key}' must be {type_names}, got {type(value).__name__}")

        if key in ('http_timeout', 'dns_timeout'):
            value = float(value)

        parsed[key] = value

    return parsed


def apply_overrides(settings: CheckSettings, **overrides: Any) -> CheckSettings:
    """
    Return a copy of settings with every non-None override applied.

    Args:
        settings: Base settings, usually loaded from a file or defaults
        **overrides: Field values given on the command line

    Returns:
        New validated CheckSettings object
    """
    names = {f.name for f in fields(CheckSettings) if f.init}
    values = {name: getattr(settings, name) for name in names}

    for key, value in overrides.items():
        if key not in names:
            raise ValueError(f"Unknown setting '{key}'")
        if value is not None:
            values[key] = value

    merged = CheckSettings(**values)
    validate_settings(merged)
    return merged
