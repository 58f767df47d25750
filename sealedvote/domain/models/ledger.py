"""Ledger-side records (VoterRecord, EncryptedInput, LedgerWriteReceipt)."""

from __future__ import annotations

from dataclasses import dataclass

from sealedvote.domain.models.handle import ZERO_HANDLE, Handle
from sealedvote.domain.models.vote_choice import CiphertextEncoding


@dataclass
class VoterRecord:
    """The ledger's single record for one voter.

    Created on first submission and mutated in place afterwards.
    ``has_voted`` always equals ``handle != ZERO_HANDLE``.
    """

    voter_id: str
    handle: Handle = ZERO_HANDLE
    write_count: int = 0

    @property
    def has_voted(self) -> bool:
        return not self.handle.is_zero


@dataclass(frozen=True)
class EncryptedInput:
    """Ciphertext handle plus the proof binding it to (contract, voter).

    Attributes:
        handle: Handle of the freshly encrypted value.
        proof: Input proof produced alongside the ciphertext.
        encoding: Encrypted type the value was packed as.
    """

    handle: Handle
    proof: bytes
    encoding: CiphertextEncoding = CiphertextEncoding.EUINT32

    def __repr__(self) -> str:
        return f"EncryptedInput(handle={self.handle.hex()}, encoding={self.encoding.value})"


@dataclass(frozen=True)
class SubmissionRequest:
    """One vote submission, consumed once by the submission coordinator."""

    voter_id: str
    ciphertext: Handle
    proof: bytes


@dataclass(frozen=True)
class LedgerWriteReceipt:
    """Confirmed old -> new handle transition for one voter.

    Attributes:
        voter_id: Voter whose record changed.
        previous_handle: Handle stored before the write (ZERO_HANDLE on first vote).
        handle: Handle stored by the write.
        sequence: Ledger-wide write counter, strictly increasing.
    """

    voter_id: str
    previous_handle: Handle
    handle: Handle
    sequence: int

    @property
    def is_revote(self) -> bool:
        return not self.previous_handle.is_zero
