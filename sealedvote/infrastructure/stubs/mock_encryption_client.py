"""Encryption collaborator stub backed by MockFheBackend."""

from __future__ import annotations

import asyncio

from sealedvote.domain.errors import EncryptionFailedError
from sealedvote.domain.models.ledger import EncryptedInput
from sealedvote.domain.models.vote_choice import CiphertextEncoding
from sealedvote.infrastructure.stubs.mock_fhe_backend import MockFheBackend


class MockEncryptionClient:
    """EncryptionProtocol implementation for local sessions.

    Attributes:
        gate: When set, every encrypt() waits for this event first.
        fail_next: When True, the next encrypt() fails once.
        calls: Number of encrypt() calls.
    """

    def __init__(self, backend: MockFheBackend) -> None:
        self._backend = backend
        self.gate: asyncio.Event | None = None
        self.fail_next = False
        self.calls = 0

    async def encrypt(
        self,
        contract_id: str,
        voter_id: str,
        value: int,
        encoding: CiphertextEncoding,
    ) -> EncryptedInput:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_next:
            self.fail_next = False
            raise EncryptionFailedError("relayer rejected the input")
        try:
            return self._backend.encrypt(contract_id, voter_id, value, encoding)
        except ValueError as exc:
            raise EncryptionFailedError(str(exc)) from exc
