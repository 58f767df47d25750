"""Unit tests for the domain error taxonomy."""

from __future__ import annotations

import pytest

from sealedvote.domain.errors import (
    AuthorizationDeniedError,
    AuthorizationExpiredError,
    EncryptionFailedError,
    HandleUnknownToOracleError,
    InvalidChoiceError,
    InvalidProofError,
    LedgerTransportError,
    OracleUnavailableError,
    SealedVoteError,
    SessionClosedError,
    UnauthorizedVoterError,
)
from sealedvote.domain.exceptions import ErrorKind


@pytest.mark.parametrize(
    ("error", "kind", "retryable"),
    [
        (InvalidProofError("0xa", "0xc"), ErrorKind.INVALID_PROOF, False),
        (UnauthorizedVoterError("0xb", "0xa"), ErrorKind.UNAUTHORIZED, False),
        (LedgerTransportError("submit_vote"), ErrorKind.TRANSPORT_FAILURE, True),
        (AuthorizationDeniedError("0xa"), ErrorKind.AUTHORIZATION_DENIED, False),
        (AuthorizationExpiredError("0xa"), ErrorKind.AUTHORIZATION_EXPIRED, True),
        (OracleUnavailableError(), ErrorKind.ORACLE_UNAVAILABLE, True),
        (HandleUnknownToOracleError("0x01"), ErrorKind.HANDLE_UNKNOWN_TO_ORACLE, False),
        (InvalidChoiceError(0, 6), ErrorKind.INVALID_CHOICE, False),
        (EncryptionFailedError(), ErrorKind.ENCRYPTION_FAILED, True),
        (SessionClosedError(), ErrorKind.SESSION_CLOSED, False),
    ],
)
def test_error_kind_and_retryability(
    error: SealedVoteError, kind: ErrorKind, retryable: bool
) -> None:
    assert isinstance(error, SealedVoteError)
    assert error.kind is kind
    assert error.retryable is retryable


def test_messages_are_human_readable() -> None:
    assert "0xb" in str(UnauthorizedVoterError("0xb", "0xa"))
    assert "scope_mismatch" in str(AuthorizationExpiredError("0xa", "scope_mismatch"))
    assert "could not be confirmed" in str(LedgerTransportError("submit_vote", "reset"))


def test_session_closed_error_has_default_message() -> None:
    assert str(SessionClosedError()) == "voting session is closed"
