"""Unit tests for OrchestratorSnapshot helpers and VoterRecord invariants."""

from __future__ import annotations

from sealedvote.domain.models.handle import HANDLE_SIZE, ZERO_HANDLE, Handle
from sealedvote.domain.models.ledger import LedgerWriteReceipt, VoterRecord
from sealedvote.domain.models.orchestrator_state import (
    OrchestratorSnapshot,
    RevealPhase,
    SubmitPhase,
)

HANDLE = Handle(b"\x05" * HANDLE_SIZE)


def _snapshot(**overrides) -> OrchestratorSnapshot:
    fields = {
        "voter_id": "0xalice",
        "submit_phase": SubmitPhase.IDLE,
        "reveal_phase": RevealPhase.IDLE,
        "handle": None,
        "clear_vote": None,
        "status": "",
    }
    fields.update(overrides)
    return OrchestratorSnapshot(**fields)


def test_idle_snapshot_is_not_busy() -> None:
    assert not _snapshot().is_busy


def test_any_active_phase_is_busy() -> None:
    assert _snapshot(submit_phase=SubmitPhase.SUBMITTING).is_busy
    assert _snapshot(reveal_phase=RevealPhase.DECRYPTING).is_busy


def test_has_voted_follows_handle() -> None:
    assert not _snapshot().has_voted
    assert not _snapshot(handle=ZERO_HANDLE).has_voted
    assert _snapshot(handle=HANDLE).has_voted


def test_voter_record_has_voted_matches_handle() -> None:
    record = VoterRecord(voter_id="0xalice")
    assert not record.has_voted
    record.handle = HANDLE
    assert record.has_voted


def test_receipt_marks_revotes() -> None:
    first = LedgerWriteReceipt("0xalice", ZERO_HANDLE, HANDLE, 1)
    second = LedgerWriteReceipt("0xalice", HANDLE, Handle(b"\x06" * HANDLE_SIZE), 2)
    assert not first.is_revote
    assert second.is_revote
