"""Voting session errors."""

from __future__ import annotations

from sealedvote.domain.exceptions import ErrorKind, SealedVoteError


class SessionClosedError(SealedVoteError):
    """Raised when connecting a voter through a session that was closed."""

    kind = ErrorKind.SESSION_CLOSED

    def __init__(self, message: str = "voting session is closed") -> None:
        super().__init__(message)
