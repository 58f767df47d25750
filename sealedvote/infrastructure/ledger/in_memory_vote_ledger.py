"""In-memory vote ledger with the contract's storage and access rules.

One VoterRecord per voter, created on first write and mutated in place.
Writes are all-or-nothing and totally ordered by a ledger-wide sequence;
there is no delete. Every confirmed write grants the voter decryption
rights on the new handle and is published to write listeners.
"""

from __future__ import annotations

import asyncio

from structlog import get_logger

from sealedvote.application.ports.vote_ledger import (
    AccessControlProtocol,
    InputProofVerifierProtocol,
    WriteListener,
)
from sealedvote.domain.errors import InvalidProofError, UnauthorizedVoterError
from sealedvote.domain.models.handle import ZERO_HANDLE, Handle, normalize_identity
from sealedvote.domain.models.ledger import LedgerWriteReceipt, VoterRecord

logger = get_logger(__name__)


class InMemoryVoteLedger:
    """VoteLedgerProtocol implementation held in process memory.

    Attributes:
        _records: voter_id -> VoterRecord.
        _sequence: Number of confirmed writes so far.
        _lock: Serialises writes.
    """

    def __init__(
        self,
        contract_id: str,
        proof_verifier: InputProofVerifierProtocol,
        access_control: AccessControlProtocol,
    ) -> None:
        self._contract_id = normalize_identity(contract_id)
        self._verifier = proof_verifier
        self._acl = access_control
        self._records: dict[str, VoterRecord] = {}
        self._sequence = 0
        self._lock = asyncio.Lock()
        self._listeners: list[WriteListener] = []
        self._log = logger.bind(contract_id=self._contract_id)

    @property
    def contract_id(self) -> str:
        return self._contract_id

    @property
    def sequence(self) -> int:
        return self._sequence

    def add_write_listener(self, listener: WriteListener) -> None:
        self._listeners.append(listener)

    async def submit_vote(
        self, sender_id: str, handle: Handle, proof: bytes
    ) -> LedgerWriteReceipt:
        """Verify the input proof for the sender, then store the handle.

        Raises:
            InvalidProofError: proof does not bind handle to (contract, sender).
        """
        sender = normalize_identity(sender_id)
        if handle.is_zero or not self._verifier.verify(
            handle, proof, self._contract_id, sender
        ):
            self._log.warning("input_proof_rejected", voter_id=sender)
            raise InvalidProofError(sender, self._contract_id)
        return await self.write(sender, sender, handle)

    async def write(
        self, sender_id: str, voter_id: str, handle: Handle
    ) -> LedgerWriteReceipt:
        """Overwrite voter_id's stored handle.

        Only the voter may write their own record.

        Raises:
            UnauthorizedVoterError: sender_id is not voter_id.
        """
        sender = normalize_identity(sender_id)
        voter = normalize_identity(voter_id)
        if sender != voter:
            self._log.warning("write_rejected_unauthorized", sender_id=sender, voter_id=voter)
            raise UnauthorizedVoterError(sender, voter)
        if handle.is_zero:
            raise ValueError("the zero handle cannot be written")

        async with self._lock:
            record = self._records.get(voter)
            if record is None:
                record = VoterRecord(voter_id=voter)
                self._records[voter] = record
            previous = record.handle
            self._acl.allow(handle, voter)
            self._sequence += 1
            record.handle = handle
            record.write_count += 1
            receipt = LedgerWriteReceipt(
                voter_id=voter,
                previous_handle=previous,
                handle=handle,
                sequence=self._sequence,
            )

        self._log.info(
            "vote_recorded",
            voter_id=voter,
            sequence=receipt.sequence,
            revote=receipt.is_revote,
        )
        for listener in list(self._listeners):
            try:
                listener(receipt)
            except Exception:
                self._log.exception("write_listener_failed")
        return receipt

    async def encrypted_vote_of(self, voter_id: str) -> Handle:
        record = self._records.get(normalize_identity(voter_id))
        return record.handle if record is not None else ZERO_HANDLE

    async def read(self, voter_id: str) -> Handle:
        return await self.encrypted_vote_of(voter_id)

    async def is_voted(self, voter_id: str) -> bool:
        return not (await self.encrypted_vote_of(voter_id)).is_zero

    def record_of(self, voter_id: str) -> VoterRecord | None:
        return self._records.get(normalize_identity(voter_id))

    def voter_count(self) -> int:
        return len(self._records)
