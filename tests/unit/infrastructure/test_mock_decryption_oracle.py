"""Unit tests for the local collaborator stubs around MockFheBackend."""

from __future__ import annotations

from dataclasses import replace
from datetime import timedelta

import pytest

from sealedvote.domain.errors import (
    AuthorizationDeniedError,
    AuthorizationExpiredError,
    EncryptionFailedError,
    HandleUnknownToOracleError,
    OracleUnavailableError,
)
from sealedvote.domain.models.authorization import AuthorizationToken
from sealedvote.domain.models.decryption import DecryptionRequest
from sealedvote.domain.models.handle import HANDLE_SIZE, Handle
from sealedvote.domain.models.vote_choice import CiphertextEncoding
from sealedvote.infrastructure.stubs import (
    MockDecryptionOracle,
    MockDecryptionSigner,
    MockEncryptionClient,
    MockFheBackend,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority

CONTRACT = "0xcontract"
ALICE = "0xalice"
BOB = "0xbob"


@pytest.fixture
def backend() -> MockFheBackend:
    return MockFheBackend(secret=b"o" * 32)


@pytest.fixture
def oracle(backend: MockFheBackend, fake_time_authority: FakeTimeAuthority) -> MockDecryptionOracle:
    return MockDecryptionOracle(backend, fake_time_authority)


@pytest.fixture
def signer(backend: MockFheBackend) -> MockDecryptionSigner:
    return MockDecryptionSigner(backend)


async def _token(
    signer: MockDecryptionSigner,
    oracle: MockDecryptionOracle,
    time_authority: FakeTimeAuthority,
    voter: str = ALICE,
) -> AuthorizationToken:
    keypair = oracle.generate_keypair()
    scope = frozenset({CONTRACT})
    issued_at = time_authority.now()
    duration = timedelta(days=1)
    signature = await signer.sign(voter, keypair.public_key, scope, issued_at, duration)
    return AuthorizationToken(
        voter_id=voter,
        public_key=keypair.public_key,
        private_key=keypair.private_key,
        signature=signature,
        issued_at=issued_at,
        validity_duration=duration,
        scoped_contracts=scope,
    )


def _granted(backend: MockFheBackend, voter: str, value: int) -> Handle:
    enc = backend.encrypt(CONTRACT, voter, value, CiphertextEncoding.EUINT32)
    backend.allow(enc.handle, voter)
    return enc.handle


class TestMockDecryptionOracle:
    @pytest.mark.asyncio
    async def test_decrypts_granted_handles(
        self, backend: MockFheBackend, oracle: MockDecryptionOracle,
        signer: MockDecryptionSigner, fake_time_authority: FakeTimeAuthority,
    ) -> None:
        first = _granted(backend, ALICE, 2)
        second = _granted(backend, ALICE, 6)
        token = await _token(signer, oracle, fake_time_authority)

        result = await oracle.user_decrypt(
            [DecryptionRequest(first, CONTRACT), DecryptionRequest(second, CONTRACT)], token
        )

        assert result == {first: 2, second: 6}
        assert oracle.calls == 1

    @pytest.mark.asyncio
    async def test_other_voters_handle_is_refused(
        self, backend: MockFheBackend, oracle: MockDecryptionOracle,
        signer: MockDecryptionSigner, fake_time_authority: FakeTimeAuthority,
    ) -> None:
        bobs = _granted(backend, BOB, 4)
        token = await _token(signer, oracle, fake_time_authority)

        with pytest.raises(HandleUnknownToOracleError) as exc_info:
            await oracle.user_decrypt([DecryptionRequest(bobs, CONTRACT)], token)
        assert exc_info.value.reason == "not_allowed"

    @pytest.mark.asyncio
    async def test_unknown_handle_is_refused(
        self, oracle: MockDecryptionOracle, signer: MockDecryptionSigner,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        token = await _token(signer, oracle, fake_time_authority)

        with pytest.raises(HandleUnknownToOracleError) as exc_info:
            await oracle.user_decrypt(
                [DecryptionRequest(Handle(b"\x07" * HANDLE_SIZE), CONTRACT)], token
            )
        assert exc_info.value.reason == "unknown"

    @pytest.mark.asyncio
    async def test_expired_token_is_refused(
        self, backend: MockFheBackend, oracle: MockDecryptionOracle,
        signer: MockDecryptionSigner, fake_time_authority: FakeTimeAuthority,
    ) -> None:
        handle = _granted(backend, ALICE, 1)
        token = await _token(signer, oracle, fake_time_authority)
        fake_time_authority.advance(delta=timedelta(days=1, seconds=1))

        with pytest.raises(AuthorizationExpiredError) as exc_info:
            await oracle.user_decrypt([DecryptionRequest(handle, CONTRACT)], token)
        assert exc_info.value.reason == "expired"

    @pytest.mark.asyncio
    async def test_forged_signature_is_refused(
        self, backend: MockFheBackend, oracle: MockDecryptionOracle,
        signer: MockDecryptionSigner, fake_time_authority: FakeTimeAuthority,
    ) -> None:
        handle = _granted(backend, ALICE, 1)
        token = replace(await _token(signer, oracle, fake_time_authority), signature="0xforged")

        with pytest.raises(AuthorizationExpiredError) as exc_info:
            await oracle.user_decrypt([DecryptionRequest(handle, CONTRACT)], token)
        assert exc_info.value.reason == "bad_signature"

    @pytest.mark.asyncio
    async def test_request_outside_scope_is_refused(
        self, backend: MockFheBackend, oracle: MockDecryptionOracle,
        signer: MockDecryptionSigner, fake_time_authority: FakeTimeAuthority,
    ) -> None:
        handle = _granted(backend, ALICE, 1)
        token = await _token(signer, oracle, fake_time_authority)

        with pytest.raises(AuthorizationExpiredError) as exc_info:
            await oracle.user_decrypt([DecryptionRequest(handle, "0xelsewhere")], token)
        assert exc_info.value.reason == "scope_mismatch"

    @pytest.mark.asyncio
    async def test_unavailable_oracle(
        self, oracle: MockDecryptionOracle, signer: MockDecryptionSigner,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        token = await _token(signer, oracle, fake_time_authority)
        oracle.available = False

        with pytest.raises(OracleUnavailableError):
            await oracle.user_decrypt([], token)

    def test_generated_keypairs_are_distinct(self, oracle: MockDecryptionOracle) -> None:
        assert oracle.generate_keypair() != oracle.generate_keypair()


class TestMockDecryptionSigner:
    @pytest.mark.asyncio
    async def test_refusal(
        self, signer: MockDecryptionSigner, fake_time_authority: FakeTimeAuthority
    ) -> None:
        signer.refuse = True

        with pytest.raises(AuthorizationDeniedError):
            await signer.sign(
                ALICE, "0xpub", frozenset({CONTRACT}), fake_time_authority.now(),
                timedelta(days=1),
            )
        assert signer.requests == [ALICE]


class TestMockEncryptionClient:
    @pytest.mark.asyncio
    async def test_encrypts_through_backend(self, backend: MockFheBackend) -> None:
        client = MockEncryptionClient(backend)

        enc = await client.encrypt(CONTRACT, ALICE, 4, CiphertextEncoding.EUINT32)

        assert backend.plaintext_of(enc.handle) == 4
        assert client.calls == 1

    @pytest.mark.asyncio
    async def test_fail_next_fails_once(self, backend: MockFheBackend) -> None:
        client = MockEncryptionClient(backend)
        client.fail_next = True

        with pytest.raises(EncryptionFailedError):
            await client.encrypt(CONTRACT, ALICE, 4, CiphertextEncoding.EUINT32)
        await client.encrypt(CONTRACT, ALICE, 4, CiphertextEncoding.EUINT32)

    @pytest.mark.asyncio
    async def test_value_too_wide_is_encryption_failure(self, backend: MockFheBackend) -> None:
        client = MockEncryptionClient(backend)

        with pytest.raises(EncryptionFailedError):
            await client.encrypt(CONTRACT, ALICE, 2, CiphertextEncoding.EBOOL)
