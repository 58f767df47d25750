"""Decryption oracle stub backed by MockFheBackend.

Checks, in order: availability, token window, token scope, token
signature, then for each handle that it is known and that the token's
voter was granted access to it.
"""

from __future__ import annotations

import asyncio
import secrets
from collections.abc import Mapping, Sequence

from structlog import get_logger

from sealedvote.application.ports.time_authority import TimeAuthorityProtocol
from sealedvote.domain.errors import (
    AuthorizationExpiredError,
    HandleUnknownToOracleError,
    OracleUnavailableError,
)
from sealedvote.domain.models.authorization import AuthorizationToken, DecryptionKeypair
from sealedvote.domain.models.decryption import DecryptionRequest
from sealedvote.domain.models.handle import Handle, normalize_identity
from sealedvote.infrastructure.stubs.mock_fhe_backend import MockFheBackend

logger = get_logger(__name__)


class MockDecryptionOracle:
    """DecryptionOracleProtocol implementation for local sessions.

    Attributes:
        available: When False, every call raises OracleUnavailableError.
        gate: When set, each call waits for this event before answering.
        calls: Number of user_decrypt() calls.
    """

    def __init__(self, backend: MockFheBackend, time_authority: TimeAuthorityProtocol) -> None:
        self._backend = backend
        self._time = time_authority
        self.available = True
        self.gate: asyncio.Event | None = None
        self.calls = 0

    def generate_keypair(self) -> DecryptionKeypair:
        return DecryptionKeypair(
            public_key="0x" + secrets.token_hex(32),
            private_key="0x" + secrets.token_hex(32),
        )

    async def user_decrypt(
        self,
        requests: Sequence[DecryptionRequest],
        token: AuthorizationToken,
    ) -> Mapping[Handle, int]:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if not self.available:
            raise OracleUnavailableError("relayer offline")

        if not token.is_valid(self._time.now()):
            raise AuthorizationExpiredError(token.voter_id, "expired")
        contracts = {normalize_identity(r.contract_id) for r in requests}
        if not token.covers(contracts):
            raise AuthorizationExpiredError(token.voter_id, "scope_mismatch")
        if not self._backend.verify_decryption_signature(
            token.signature,
            token.voter_id,
            token.public_key,
            token.scoped_contracts,
            token.issued_at,
            token.validity_duration,
        ):
            raise AuthorizationExpiredError(token.voter_id, "bad_signature")

        results: dict[Handle, int] = {}
        for request in requests:
            handle = request.handle
            if not self._backend.is_known(handle):
                raise HandleUnknownToOracleError(handle.hex(), "unknown")
            if self._backend.contract_of(handle) != normalize_identity(request.contract_id):
                raise HandleUnknownToOracleError(handle.hex(), "wrong_contract")
            if not self._backend.is_allowed(handle, token.voter_id):
                raise HandleUnknownToOracleError(handle.hex(), "not_allowed")
            results[handle] = self._backend.plaintext_of(handle)

        logger.debug("mock_oracle_decrypted", batch_size=len(results))
        return results
