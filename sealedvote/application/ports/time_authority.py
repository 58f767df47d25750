"""Time Authority Protocol - interface for consistent timestamp provisioning.

Every expiry decision (authorization tokens, oracle checks) reads time
from an injected TimeAuthorityProtocol instead of calling datetime.now()
directly, so tests can move the clock deterministically.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    For production:
        Use SystemTimeAuthority from sealedvote.application.services

    For testing:
        Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime (UTC)."""
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """Return current UTC time."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic clock value for measuring elapsed time.

        Only differences between two values are meaningful.
        """
        ...
