"""Decryption signer stub standing in for the voter's wallet."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

from sealedvote.domain.errors import AuthorizationDeniedError
from sealedvote.infrastructure.stubs.mock_fhe_backend import MockFheBackend


class MockDecryptionSigner:
    """DecryptionSignerProtocol implementation for local sessions.

    Attributes:
        refuse: When True, every request is refused (voter rejects the prompt).
        gate: When set, each request waits for this event (voter thinking).
        requests: Voter ids of every signing request, in order.
    """

    def __init__(self, backend: MockFheBackend) -> None:
        self._backend = backend
        self.refuse = False
        self.gate: asyncio.Event | None = None
        self.requests: list[str] = []

    async def sign(
        self,
        voter_id: str,
        public_key: str,
        scoped_contracts: frozenset[str],
        issued_at: datetime,
        validity_duration: timedelta,
    ) -> str:
        self.requests.append(voter_id)
        if self.gate is not None:
            await self.gate.wait()
        if self.refuse:
            raise AuthorizationDeniedError(voter_id, "refused")
        return self._backend.sign_decryption_request(
            voter_id, public_key, scoped_contracts, issued_at, validity_duration
        )
