"""Submission coordinator: applies a ciphertext/proof pair to the ledger.

Revote semantics: a new ciphertext for a voter who already voted is
always accepted and fully supersedes the previous handle. That is the
expected path, not an error.

Error mapping:
- InvalidProofError / UnauthorizedVoterError: raised locally for a zero
  handle or a foreign sender, otherwise propagated from the ledger
- ConnectionError, OSError, TimeoutError: LedgerTransportError (retry the
  same ciphertext, do not mint a new one)
"""

from __future__ import annotations

import asyncio

from structlog import get_logger

from sealedvote.application.ports.vote_ledger import VoteLedgerProtocol
from sealedvote.domain.errors import (
    InvalidProofError,
    LedgerTransportError,
    UnauthorizedVoterError,
)
from sealedvote.domain.models.handle import Handle, normalize_identity
from sealedvote.domain.models.ledger import LedgerWriteReceipt, SubmissionRequest

logger = get_logger(__name__)

DEFAULT_CONFIRMATION_TIMEOUT_SECONDS = 60.0


class SubmissionCoordinator:
    """Validates and applies one vote submission.

    The proof is not checked here: the ledger runs the cryptographic
    verification step against (contract, sender) when it receives the
    write.

    Example:
        >>> coordinator = SubmissionCoordinator(ledger)
        >>> receipt = await coordinator.submit(voter_id, enc.handle, enc.proof)
        >>> receipt.handle == enc.handle
        True
    """

    def __init__(
        self,
        ledger: VoteLedgerProtocol,
        confirmation_timeout_seconds: float = DEFAULT_CONFIRMATION_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the coordinator.

        Args:
            ledger: Ledger the vote is written to.
            confirmation_timeout_seconds: How long to wait for the write to
                be confirmed before reporting a transport failure.
        """
        self._ledger = ledger
        self._timeout = confirmation_timeout_seconds

    async def submit(
        self,
        voter_id: str,
        ciphertext: Handle,
        proof: bytes,
        *,
        sender_id: str | None = None,
    ) -> LedgerWriteReceipt:
        """Submit a ciphertext as voter_id's vote.

        Args:
            voter_id: Voter whose record is written.
            ciphertext: Handle produced by the encryption collaborator.
            proof: Input proof produced alongside the handle.
            sender_id: Identity signing the write. Defaults to voter_id.

        Returns:
            The ledger's receipt for the confirmed write.

        Raises:
            UnauthorizedVoterError: sender_id does not control voter_id.
            InvalidProofError: ciphertext is the zero handle, or the ledger
                rejected the proof.
            LedgerTransportError: the write could not be confirmed.
        """
        request = SubmissionRequest(
            voter_id=normalize_identity(voter_id),
            ciphertext=ciphertext,
            proof=proof,
        )
        sender = normalize_identity(sender_id) if sender_id is not None else request.voter_id
        log = logger.bind(
            voter_id=request.voter_id,
            contract_id=self._ledger.contract_id,
            handle=ciphertext.hex(),
        )

        if sender != request.voter_id:
            log.warning("submission_rejected_unauthorized", sender_id=sender)
            raise UnauthorizedVoterError(sender, request.voter_id)

        if ciphertext.is_zero:
            # The ledger would store "no vote"; refuse before sending.
            log.warning("submission_rejected_zero_handle")
            raise InvalidProofError(
                request.voter_id, self._ledger.contract_id, "zero handle"
            )

        log.info("submission_started")
        try:
            receipt = await asyncio.wait_for(
                self._ledger.submit_vote(sender, request.ciphertext, request.proof),
                timeout=self._timeout,
            )
        except TimeoutError as exc:
            log.warning("submission_unconfirmed", cause="timeout")
            raise LedgerTransportError("submit_vote", "confirmation timed out") from exc
        except OSError as exc:
            log.warning("submission_unconfirmed", cause=str(exc))
            raise LedgerTransportError("submit_vote", str(exc)) from exc

        log.info(
            "submission_confirmed",
            sequence=receipt.sequence,
            revote=receipt.is_revote,
        )
        return receipt
