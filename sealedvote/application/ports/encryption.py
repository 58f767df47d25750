"""Encryption collaborator port.

Given (contract_id, voter_id, plaintext), produce a ciphertext handle and
the proof binding it to that exact pair.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from sealedvote.domain.models.ledger import EncryptedInput
from sealedvote.domain.models.vote_choice import CiphertextEncoding


@runtime_checkable
class EncryptionProtocol(Protocol):
    async def encrypt(
        self,
        contract_id: str,
        voter_id: str,
        value: int,
        encoding: CiphertextEncoding,
    ) -> EncryptedInput:
        """Encrypt value for use by voter_id on contract_id.

        Raises:
            EncryptionFailedError: the value could not be encrypted.
        """
        ...
