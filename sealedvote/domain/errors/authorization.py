"""Decryption authorization errors."""

from __future__ import annotations

from sealedvote.domain.exceptions import ErrorKind, SealedVoteError


class AuthorizationError(SealedVoteError):
    """Base class for authorization token failures."""


class AuthorizationDeniedError(AuthorizationError):
    """Raised when the signer refuses, fails or times out.

    No token is cached when this is raised.

    Attributes:
        voter_id: Voter whose signature was requested.
        reason: Short machine-friendly reason (``refused``, ``timeout``...).
    """

    kind = ErrorKind.AUTHORIZATION_DENIED

    def __init__(self, voter_id: str, reason: str = "refused") -> None:
        self.voter_id = voter_id
        self.reason = reason
        super().__init__(f"Decryption authorization denied for {voter_id} ({reason})")


class AuthorizationExpiredError(AuthorizationError):
    """Raised when a token lapsed or does not cover a requested contract.

    Either way the remedy is the same: issue a fresh token and retry.

    Attributes:
        voter_id: Voter the token belongs to.
        reason: ``expired`` or ``scope_mismatch``.
    """

    kind = ErrorKind.AUTHORIZATION_EXPIRED
    retryable = True

    def __init__(self, voter_id: str, reason: str = "expired") -> None:
        self.voter_id = voter_id
        self.reason = reason
        super().__init__(f"Decryption authorization for {voter_id} is no longer valid ({reason})")
