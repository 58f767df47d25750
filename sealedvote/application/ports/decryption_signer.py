"""Decryption signer port (wallet signing, user-interactive).

The signature entitles the oracle to decrypt, on the voter's behalf,
handles belonging to the scoped contracts during the validity window.
Signing may take arbitrarily long, be refused, or be cancelled.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol, runtime_checkable


@runtime_checkable
class DecryptionSignerProtocol(Protocol):
    async def sign(
        self,
        voter_id: str,
        public_key: str,
        scoped_contracts: frozenset[str],
        issued_at: datetime,
        validity_duration: timedelta,
    ) -> str:
        """Return the voter's signature over the decryption request.

        Raises:
            AuthorizationDeniedError: the voter refused to sign.
        """
        ...
