"""Vote Ledger Port.

The ledger contract holds one ciphertext handle per voter.

Contract surface:
| Operation        | Inputs                  | Output                 | Caller constraint      |
|------------------|-------------------------|------------------------|------------------------|
| submit_vote      | ciphertext handle, proof| LedgerWriteReceipt     | must be signed by voter|
| encrypted_vote_of| voter_id                | handle (zero if none)  | public read            |
| is_voted         | voter_id                | bool                   | public read            |

Rules:
1. WRITES OVERWRITE - a new submission fully supersedes the previous one
2. NO DELETION - a vote can be superseded, never withdrawn
3. ORDERED - writes are totally ordered; reads never go backwards
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from sealedvote.domain.models.handle import Handle
from sealedvote.domain.models.ledger import LedgerWriteReceipt

WriteListener = Callable[[LedgerWriteReceipt], None]


@runtime_checkable
class VoteLedgerProtocol(Protocol):
    """Protocol for the per-voter encrypted vote store."""

    @property
    def contract_id(self) -> str:
        """Identity of the ledger contract (the scope for proofs and tokens)."""
        ...

    async def submit_vote(
        self, sender_id: str, handle: Handle, proof: bytes
    ) -> LedgerWriteReceipt:
        """Store handle as sender's vote, replacing any previous one.

        The sender is the authenticated identity that signed the write;
        it is also the voter whose record is written.

        Returns:
            Receipt describing the confirmed old -> new transition.

        Raises:
            InvalidProofError: proof does not bind handle to (contract, sender).
            UnauthorizedVoterError: sender may not write this record.
        """
        ...

    async def encrypted_vote_of(self, voter_id: str) -> Handle:
        """Return the voter's current handle, ZERO_HANDLE if never submitted."""
        ...

    async def is_voted(self, voter_id: str) -> bool:
        """Return True once the voter has a stored handle."""
        ...


@runtime_checkable
class InputProofVerifierProtocol(Protocol):
    """Cryptographic check that a ciphertext was built for (contract, sender).

    The verification itself belongs to the encryption scheme and is not
    re-derived by the ledger.
    """

    def verify(
        self, handle: Handle, proof: bytes, contract_id: str, sender_id: str
    ) -> bool:
        ...


@runtime_checkable
class AccessControlProtocol(Protocol):
    """Grants decryption rights on a handle."""

    def allow(self, handle: Handle, account_id: str) -> None:
        ...

    def is_allowed(self, handle: Handle, account_id: str) -> bool:
        ...
