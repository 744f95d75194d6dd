"""
Base checker infrastructure for domain health checks.

Provides the abstract base class shared by the DNS resolvers and the
version endpoint checker.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseChecker(ABC):
    """
    Abstract base class for all host checkers.

    All checker implementations must inherit from this class and implement
    the check() method. Checkers are stateless apart from their settings,
    so one instance is shared by every concurrent host check.
    """

    def __init__(self, timeout: float = 10):
        """
        Initialize the checker.

        Args:
            timeout: Maximum time in seconds to wait for check completion (default: 10)
        """
        self.timeout = timeout

    @abstractmethod
    async def check(self, host: str, **kwargs) -> Any:
        """
        Execute the check for the specified host.

        Implementations must absorb ordinary network and subprocess failures
        into their return value instead of raising.

        Args:
            host: The host name to check
            **kwargs: Additional parameters specific to the check type

        Returns:
            Check-specific result value
        """
        pass
