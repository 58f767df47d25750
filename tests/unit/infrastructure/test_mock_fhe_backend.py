"""Unit tests for MockFheBackend."""

from datetime import UTC, datetime, timedelta

import pytest

from sealedvote.domain.models.handle import HANDLE_SIZE, Handle
from sealedvote.domain.models.vote_choice import CiphertextEncoding
from sealedvote.infrastructure.stubs.mock_fhe_backend import MockFheBackend

CONTRACT = "0xcontract"
ALICE = "0xalice"
ISSUED = datetime(2026, 1, 1, tzinfo=UTC)


@pytest.fixture
def backend() -> MockFheBackend:
    return MockFheBackend(secret=b"s" * 32)


class TestEncrypt:
    def test_same_plaintext_yields_distinct_handles(self, backend: MockFheBackend) -> None:
        first = backend.encrypt(CONTRACT, ALICE, 3, CiphertextEncoding.EUINT32)
        second = backend.encrypt(CONTRACT, ALICE, 3, CiphertextEncoding.EUINT32)

        assert first.handle != second.handle
        assert len(first.handle.value) == HANDLE_SIZE
        assert not first.handle.is_zero
        assert backend.plaintext_of(first.handle) == 3
        assert backend.contract_of(first.handle) == CONTRACT

    def test_value_must_fit_encoding(self, backend: MockFheBackend) -> None:
        with pytest.raises(ValueError):
            backend.encrypt(CONTRACT, ALICE, 256, CiphertextEncoding.EUINT8)

    def test_secret_must_be_32_bytes(self) -> None:
        with pytest.raises(ValueError):
            MockFheBackend(secret=b"short")


class TestInputProof:
    def test_proof_binds_contract_and_sender(self, backend: MockFheBackend) -> None:
        enc = backend.encrypt(CONTRACT, ALICE, 1, CiphertextEncoding.EUINT32)

        assert backend.verify(enc.handle, enc.proof, CONTRACT, ALICE)
        assert backend.verify(enc.handle, enc.proof, CONTRACT, ALICE.upper().replace("0X", "0x"))
        assert not backend.verify(enc.handle, enc.proof, CONTRACT, "0xbob")
        assert not backend.verify(enc.handle, enc.proof, "0xother", ALICE)

    def test_proof_from_other_backend_fails(self, backend: MockFheBackend) -> None:
        enc = backend.encrypt(CONTRACT, ALICE, 1, CiphertextEncoding.EUINT32)
        other = MockFheBackend(secret=b"t" * 32)

        assert not other.verify(enc.handle, enc.proof, CONTRACT, ALICE)


class TestAccessControl:
    def test_allow_grants_only_named_account(self, backend: MockFheBackend) -> None:
        enc = backend.encrypt(CONTRACT, ALICE, 1, CiphertextEncoding.EUINT32)
        assert not backend.is_allowed(enc.handle, ALICE)

        backend.allow(enc.handle, ALICE)

        assert backend.is_allowed(enc.handle, ALICE)
        assert not backend.is_allowed(enc.handle, "0xbob")

    def test_allow_unknown_handle_raises(self, backend: MockFheBackend) -> None:
        with pytest.raises(KeyError):
            backend.allow(Handle(b"\x05" * HANDLE_SIZE), ALICE)


class TestDecryptionSignature:
    def test_signature_verifies_for_same_request(self, backend: MockFheBackend) -> None:
        scope = frozenset({CONTRACT})
        signature = backend.sign_decryption_request(
            ALICE, "0xpub", scope, ISSUED, timedelta(days=1)
        )

        assert signature.startswith("0x")
        assert backend.verify_decryption_signature(
            signature, ALICE, "0xpub", scope, ISSUED, timedelta(days=1)
        )
        assert not backend.verify_decryption_signature(
            signature, ALICE, "0xpub", scope, ISSUED, timedelta(days=2)
        )
        assert not backend.verify_decryption_signature(
            signature, ALICE, "0xotherpub", scope, ISSUED, timedelta(days=1)
        )
