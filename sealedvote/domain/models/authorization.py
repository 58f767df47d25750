"""Decryption authorization token (validity window and contract scope)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta


@dataclass(frozen=True)
class DecryptionKeypair:
    """Ephemeral keypair the oracle re-encrypts cleartexts to."""

    public_key: str
    private_key: str = field(repr=False)


@dataclass(frozen=True)
class AuthorizationToken:
    """Voter-signed, time-bounded credential for user decryption.

    Attributes:
        voter_id: Voter who signed the token.
        public_key: Public half of the decryption keypair.
        private_key: Private half, kept out of repr and logs.
        signature: Signer output over (public_key, scope, window).
        issued_at: Start of the validity window (UTC).
        validity_duration: Length of the validity window.
        scoped_contracts: Contracts the token allows decryption for.
    """

    voter_id: str
    public_key: str
    private_key: str = field(repr=False)
    signature: str = field(repr=False)
    issued_at: datetime
    validity_duration: timedelta
    scoped_contracts: frozenset[str]

    def __post_init__(self) -> None:
        if self.issued_at.tzinfo is None:
            raise ValueError("issued_at must be timezone-aware (UTC)")
        if self.validity_duration <= timedelta(0):
            raise ValueError("validity_duration must be positive")
        if not self.scoped_contracts:
            raise ValueError("scoped_contracts must not be empty")

    @property
    def expires_at(self) -> datetime:
        return self.issued_at + self.validity_duration

    def is_valid(self, now: datetime) -> bool:
        """True while now is strictly before the end of the window."""
        return now < self.expires_at

    def covers(self, contracts: frozenset[str] | set[str]) -> bool:
        return set(contracts) <= self.scoped_contracts
