"""Decryption oracle errors."""

from __future__ import annotations

from sealedvote.domain.exceptions import ErrorKind, SealedVoteError


class DecryptionError(SealedVoteError):
    """Base class for errors raised while resolving cleartexts."""


class OracleUnavailableError(DecryptionError):
    """Raised when the oracle cannot be reached or does not answer in time."""

    kind = ErrorKind.ORACLE_UNAVAILABLE
    retryable = True

    def __init__(self, cause: str = "") -> None:
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Decryption oracle unavailable{detail}")


class HandleUnknownToOracleError(DecryptionError):
    """Raised when the oracle cannot decrypt a handle for this voter.

    Fatal for that handle: retrying with the same inputs cannot succeed.

    Attributes:
        handle_hex: Hex rendering of the offending handle.
    """

    kind = ErrorKind.HANDLE_UNKNOWN_TO_ORACLE

    def __init__(self, handle_hex: str, reason: str = "unknown") -> None:
        self.handle_hex = handle_hex
        self.reason = reason
        super().__init__(f"Oracle cannot decrypt handle {handle_hex} ({reason})")
