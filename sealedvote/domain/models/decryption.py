"""Decryption request and result types."""

from __future__ import annotations

from dataclasses import dataclass

from sealedvote.domain.models.handle import Handle

# Cleartext reported for ZERO_HANDLE. Never a valid choice.
NO_VOTE_CLEARTEXT = 0


@dataclass(frozen=True)
class DecryptionRequest:
    handle: Handle
    contract_id: str


@dataclass(frozen=True)
class RevealedVote:
    """A handle together with its cleartext.

    ``choice`` is NO_VOTE_CLEARTEXT only when ``handle`` is ZERO_HANDLE.
    """

    handle: Handle
    choice: int

    @property
    def has_vote(self) -> bool:
        return not self.handle.is_zero
