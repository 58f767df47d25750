"""Vote client configuration.

Frozen dataclasses with environment variable overrides for deployment
tuning.

Environment Variables (Authorization):
- SEALEDVOTE_AUTH_VALIDITY_DAYS: Token validity window in days (default: 365)
- SEALEDVOTE_SIGNING_TIMEOUT: Seconds to wait for the signer (default: 120.0)

Environment Variables (Client):
- SEALEDVOTE_MAX_CHOICE: Highest valid ballot choice (default: 6)
- SEALEDVOTE_ORACLE_TIMEOUT: Seconds to wait for the oracle (default: 60.0)
- SEALEDVOTE_LEDGER_TIMEOUT: Seconds to wait for a write confirmation (default: 60.0)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta

from sealedvote.domain.models.vote_choice import DEFAULT_MAX_CHOICE


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed float value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class AuthorizationConfig:
    """Configuration for decryption authorization tokens.

    Attributes:
        validity_days: How long a signed token stays usable.
                      Default: 365 days. Signing is interactive, so tokens
                      are long-lived and reused.
        signing_timeout_seconds: How long to wait for the voter to sign
                                before treating the request as denied.
    """

    validity_days: int = 365
    signing_timeout_seconds: float = 120.0

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.validity_days < 1:
            raise ValueError(f"validity_days must be positive, got {self.validity_days}")
        if self.signing_timeout_seconds <= 0:
            raise ValueError(
                f"signing_timeout_seconds must be positive, got {self.signing_timeout_seconds}"
            )

    @property
    def validity_duration(self) -> timedelta:
        return timedelta(days=self.validity_days)

    @classmethod
    def from_environment(cls) -> "AuthorizationConfig":
        """Create config from environment variables with defaults."""
        return cls(
            validity_days=_get_int_env("SEALEDVOTE_AUTH_VALIDITY_DAYS", 365),
            signing_timeout_seconds=_get_float_env("SEALEDVOTE_SIGNING_TIMEOUT", 120.0),
        )


@dataclass(frozen=True)
class VoteClientConfig:
    """Configuration for the vote client orchestration.

    Attributes:
        max_choice: Highest valid choice; valid choices are 1..max_choice.
        oracle_timeout_seconds: Upper bound on one oracle round trip.
        ledger_timeout_seconds: Upper bound on one write confirmation.
        authorization: Token settings.
    """

    max_choice: int = DEFAULT_MAX_CHOICE
    oracle_timeout_seconds: float = 60.0
    ledger_timeout_seconds: float = 60.0
    authorization: AuthorizationConfig = field(default_factory=AuthorizationConfig)

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_choice < 1:
            raise ValueError(f"max_choice must be positive, got {self.max_choice}")
        if self.oracle_timeout_seconds <= 0:
            raise ValueError(
                f"oracle_timeout_seconds must be positive, got {self.oracle_timeout_seconds}"
            )
        if self.ledger_timeout_seconds <= 0:
            raise ValueError(
                f"ledger_timeout_seconds must be positive, got {self.ledger_timeout_seconds}"
            )

    @classmethod
    def from_environment(cls) -> "VoteClientConfig":
        """Create config from environment variables with defaults.

        Returns:
            VoteClientConfig with values from environment or defaults.
        """
        return cls(
            max_choice=_get_int_env("SEALEDVOTE_MAX_CHOICE", DEFAULT_MAX_CHOICE),
            oracle_timeout_seconds=_get_float_env("SEALEDVOTE_ORACLE_TIMEOUT", 60.0),
            ledger_timeout_seconds=_get_float_env("SEALEDVOTE_LEDGER_TIMEOUT", 60.0),
            authorization=AuthorizationConfig.from_environment(),
        )


# Default production config
DEFAULT_VOTE_CLIENT_CONFIG = VoteClientConfig()

# Testing config with short timeouts and a one-day token window
TEST_VOTE_CLIENT_CONFIG = VoteClientConfig(
    max_choice=6,
    oracle_timeout_seconds=2.0,
    ledger_timeout_seconds=2.0,
    authorization=AuthorizationConfig(validity_days=1, signing_timeout_seconds=2.0),
)
