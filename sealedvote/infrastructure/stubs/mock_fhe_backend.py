"""Mock FHE backend shared by the local collaborator stubs.

Mints handles as BLAKE3 digests over (contract, voter, nonce), attests
input proofs and decryption signatures with a keyed BLAKE3 MAC, and keeps
plaintexts and ACL grants in memory.

Implements InputProofVerifierProtocol and AccessControlProtocol so an
InMemoryVoteLedger can be wired directly against it.
"""

from __future__ import annotations

import hmac
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta

import blake3

from sealedvote.domain.models.handle import Handle, normalize_identity
from sealedvote.domain.models.ledger import EncryptedInput
from sealedvote.domain.models.vote_choice import CiphertextEncoding


@dataclass
class _Ciphertext:
    contract_id: str
    owner_id: str
    value: int
    encoding: CiphertextEncoding
    allowed: set[str] = field(default_factory=set)


class MockFheBackend:
    """In-memory stand-in for the encryption scheme and its key material."""

    def __init__(self, secret: bytes | None = None) -> None:
        """Initialize the backend.

        Args:
            secret: 32-byte MAC key. Random when omitted.
        """
        if secret is None:
            secret = secrets.token_bytes(32)
        if len(secret) != 32:
            raise ValueError("secret must be 32 bytes")
        self._secret = secret
        self._ciphertexts: dict[Handle, _Ciphertext] = {}
        self._nonce = 0

    # Encryption ---------------------------------------------------------

    def encrypt(
        self,
        contract_id: str,
        voter_id: str,
        value: int,
        encoding: CiphertextEncoding,
    ) -> EncryptedInput:
        contract = normalize_identity(contract_id)
        voter = normalize_identity(voter_id)
        encoding.validate(value)

        self._nonce += 1
        material = b"|".join(
            [
                b"handle",
                contract.encode(),
                voter.encode(),
                self._nonce.to_bytes(8, "big"),
                secrets.token_bytes(16),
            ]
        )
        handle = Handle(blake3.blake3(material).digest())
        self._ciphertexts[handle] = _Ciphertext(
            contract_id=contract, owner_id=voter, value=value, encoding=encoding
        )
        return EncryptedInput(
            handle=handle,
            proof=self._input_proof(handle, contract, voter),
            encoding=encoding,
        )

    def verify(self, handle: Handle, proof: bytes, contract_id: str, sender_id: str) -> bool:
        """Check that proof binds handle to (contract, sender)."""
        if handle not in self._ciphertexts:
            return False
        expected = self._input_proof(
            handle, normalize_identity(contract_id), normalize_identity(sender_id)
        )
        return hmac.compare_digest(expected, proof)

    # Access control -----------------------------------------------------

    def allow(self, handle: Handle, account_id: str) -> None:
        ciphertext = self._ciphertexts.get(handle)
        if ciphertext is None:
            raise KeyError(f"unknown handle {handle.hex()}")
        ciphertext.allowed.add(normalize_identity(account_id))

    def is_allowed(self, handle: Handle, account_id: str) -> bool:
        ciphertext = self._ciphertexts.get(handle)
        return ciphertext is not None and normalize_identity(account_id) in ciphertext.allowed

    # Decryption ---------------------------------------------------------

    def is_known(self, handle: Handle) -> bool:
        return handle in self._ciphertexts

    def contract_of(self, handle: Handle) -> str | None:
        ciphertext = self._ciphertexts.get(handle)
        return ciphertext.contract_id if ciphertext is not None else None

    def plaintext_of(self, handle: Handle) -> int:
        return self._ciphertexts[handle].value

    def sign_decryption_request(
        self,
        voter_id: str,
        public_key: str,
        scoped_contracts: frozenset[str],
        issued_at: datetime,
        validity_duration: timedelta,
    ) -> str:
        message = "|".join(
            [
                normalize_identity(voter_id),
                public_key,
                ",".join(sorted(scoped_contracts)),
                str(int(issued_at.timestamp())),
                str(int(validity_duration.total_seconds())),
            ]
        ).encode()
        return "0x" + blake3.blake3(b"decrypt|" + message, key=self._secret).hexdigest()

    def verify_decryption_signature(
        self,
        signature: str,
        voter_id: str,
        public_key: str,
        scoped_contracts: frozenset[str],
        issued_at: datetime,
        validity_duration: timedelta,
    ) -> bool:
        expected = self.sign_decryption_request(
            voter_id, public_key, scoped_contracts, issued_at, validity_duration
        )
        return hmac.compare_digest(expected, signature)

    def _input_proof(self, handle: Handle, contract_id: str, voter_id: str) -> bytes:
        message = b"|".join([b"input", handle.value, contract_id.encode(), voter_id.encode()])
        return blake3.blake3(message, key=self._secret).digest()
