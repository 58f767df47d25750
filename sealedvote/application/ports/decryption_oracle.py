"""Decryption oracle port.

The oracle decrypts a batch of (handle, contract) pairs for one
authorization token. Round trips may take seconds.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from sealedvote.domain.models.authorization import AuthorizationToken, DecryptionKeypair
from sealedvote.domain.models.decryption import DecryptionRequest
from sealedvote.domain.models.handle import Handle


@runtime_checkable
class DecryptionOracleProtocol(Protocol):
    def generate_keypair(self) -> DecryptionKeypair:
        """Create the ephemeral keypair a token is issued for."""
        ...

    async def user_decrypt(
        self,
        requests: Sequence[DecryptionRequest],
        token: AuthorizationToken,
    ) -> Mapping[Handle, int]:
        """Return the cleartext of every requested handle.

        Raises:
            AuthorizationExpiredError: token lapsed or does not cover a contract.
            HandleUnknownToOracleError: a handle cannot be decrypted for this voter.
            OracleUnavailableError: transient failure.
        """
        ...
