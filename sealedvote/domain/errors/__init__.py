"""Domain errors for SealedVote.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from SealedVoteError.
"""

from sealedvote.domain.errors.authorization import (
    AuthorizationDeniedError,
    AuthorizationError,
    AuthorizationExpiredError,
)
from sealedvote.domain.errors.decryption import (
    DecryptionError,
    HandleUnknownToOracleError,
    OracleUnavailableError,
)
from sealedvote.domain.errors.session import SessionClosedError
from sealedvote.domain.errors.submission import (
    InvalidProofError,
    LedgerTransportError,
    SubmissionError,
    UnauthorizedVoterError,
)
from sealedvote.domain.errors.vote import EncryptionFailedError, InvalidChoiceError
from sealedvote.domain.exceptions import ErrorKind, SealedVoteError

__all__: list[str] = [
    "AuthorizationDeniedError",
    "AuthorizationError",
    "AuthorizationExpiredError",
    "DecryptionError",
    "EncryptionFailedError",
    "ErrorKind",
    "HandleUnknownToOracleError",
    "InvalidChoiceError",
    "InvalidProofError",
    "LedgerTransportError",
    "OracleUnavailableError",
    "SealedVoteError",
    "SessionClosedError",
    "SubmissionError",
    "UnauthorizedVoterError",
]
