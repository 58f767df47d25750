"""Client orchestrator phases and the snapshot published to subscribers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sealedvote.domain.exceptions import ErrorKind
from sealedvote.domain.models.handle import Handle


class SubmitPhase(str, Enum):
    IDLE = "idle"
    ENCRYPTING = "encrypting"
    SUBMITTING = "submitting"
    CONFIRMING = "confirming"


class RevealPhase(str, Enum):
    IDLE = "idle"
    AUTHORIZING = "authorizing"
    DECRYPTING = "decrypting"


@dataclass(frozen=True)
class OrchestratorSnapshot:
    """Point-in-time view of one voter's client state.

    Attributes:
        voter_id: Voter the orchestrator acts for.
        submit_phase: Current phase of the vote path.
        reveal_phase: Current phase of the reveal path.
        handle: Last handle read from the ledger (None before the first read).
        clear_vote: Cleartext for ``handle`` if known, else None.
        status: Human-readable outcome of the most recent operation.
        last_error: Kind of the most recent failure, None after a success.
    """

    voter_id: str
    submit_phase: SubmitPhase
    reveal_phase: RevealPhase
    handle: Handle | None
    clear_vote: int | None
    status: str
    last_error: ErrorKind | None = None

    @property
    def is_busy(self) -> bool:
        return (
            self.submit_phase is not SubmitPhase.IDLE
            or self.reveal_phase is not RevealPhase.IDLE
        )

    @property
    def has_voted(self) -> bool:
        return self.handle is not None and not self.handle.is_zero
