"""Base exception classes for the SealedVote domain layer."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Classification surfaced to voters when an operation fails."""

    INVALID_PROOF = "invalid_proof"
    UNAUTHORIZED = "unauthorized"
    TRANSPORT_FAILURE = "transport_failure"
    AUTHORIZATION_DENIED = "authorization_denied"
    AUTHORIZATION_EXPIRED = "authorization_expired"
    ORACLE_UNAVAILABLE = "oracle_unavailable"
    HANDLE_UNKNOWN_TO_ORACLE = "handle_unknown_to_oracle"
    INVALID_CHOICE = "invalid_choice"
    ENCRYPTION_FAILED = "encryption_failed"
    SESSION_CLOSED = "session_closed"


class SealedVoteError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class and set
    ``kind``. ``retryable`` tells the caller whether repeating the whole
    operation from idle can succeed without changing its inputs.
    """

    kind: ErrorKind = ErrorKind.TRANSPORT_FAILURE
    retryable: bool = False

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
