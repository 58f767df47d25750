"""Submission errors raised while writing a ciphertext to the ledger.

Three distinct outcomes are kept apart on purpose:
- InvalidProofError: the ciphertext/proof pair does not verify. Encrypt again.
- UnauthorizedVoterError: the sender does not control the voter identity.
- LedgerTransportError: the write could not be confirmed. Retry the same
  ciphertext; do not mint a new one.
"""

from __future__ import annotations

from sealedvote.domain.exceptions import ErrorKind, SealedVoteError


class SubmissionError(SealedVoteError):
    """Base class for errors raised by the submission path."""


class InvalidProofError(SubmissionError):
    """Raised when an input proof does not verify against its context.

    Attributes:
        voter_id: Voter the ciphertext was submitted for.
        contract_id: Ledger contract the proof was checked against.
    """

    kind = ErrorKind.INVALID_PROOF

    def __init__(self, voter_id: str, contract_id: str, reason: str = "") -> None:
        self.voter_id = voter_id
        self.contract_id = contract_id
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Input proof rejected for voter {voter_id} on {contract_id}{detail}"
        )


class UnauthorizedVoterError(SubmissionError):
    """Raised when a write is attempted for a voter the sender does not control.

    Attributes:
        sender_id: Identity that signed the write.
        voter_id: Identity whose record was targeted.
    """

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, sender_id: str, voter_id: str) -> None:
        self.sender_id = sender_id
        self.voter_id = voter_id
        super().__init__(f"Sender {sender_id} may not write the vote of {voter_id}")


class LedgerTransportError(SubmissionError):
    """Raised when a ledger write could not be confirmed.

    The ciphertext may or may not have landed. Callers retry the whole
    operation once the ledger is reachable again.
    """

    kind = ErrorKind.TRANSPORT_FAILURE
    retryable = True

    def __init__(self, operation: str, cause: str = "") -> None:
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Ledger {operation} could not be confirmed{detail}")
