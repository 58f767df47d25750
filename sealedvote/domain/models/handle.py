"""Ciphertext handle and identity value types.

A Handle is the ledger's opaque 32-byte reference to a ciphertext. It is
never the plaintext. ZERO_HANDLE is the reserved "no ciphertext stored"
value returned for voters who never submitted.
"""

from __future__ import annotations

from dataclasses import dataclass

HANDLE_SIZE = 32

# Address-like identities. Normalised to lower case so that checksummed
# and plain spellings of the same identity compare equal.
VoterId = str
ContractId = str

# Spellings a ledger read may use for an empty bytes32 slot
_ZERO_SPELLINGS = frozenset({"", "0x", "0x0"})


def normalize_identity(identity: str) -> str:
    """Return the canonical (lower case, stripped) spelling of an identity.

    Raises:
        ValueError: If the identity is empty.
    """
    value = identity.strip().lower()
    if not value:
        raise ValueError("identity must be a non-empty string")
    return value


@dataclass(frozen=True, eq=True)
class Handle:
    """Opaque fixed-size ciphertext reference.

    Attributes:
        value: Exactly HANDLE_SIZE bytes.
    """

    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != HANDLE_SIZE:
            raise ValueError(
                f"handle must be {HANDLE_SIZE} bytes, got {len(self.value)}"
            )

    @property
    def is_zero(self) -> bool:
        return self.value == bytes(HANDLE_SIZE)

    def hex(self) -> str:
        return "0x" + self.value.hex()

    @classmethod
    def from_hex(cls, text: str) -> Handle:
        """Parse a ``0x``-prefixed hex string.

        The short zero spellings ``0x`` and ``0x0`` parse as ZERO_HANDLE.

        Raises:
            ValueError: If the text is not valid hex of the right size.
        """
        text = text.strip().lower()
        if text in _ZERO_SPELLINGS:
            return cls(bytes(HANDLE_SIZE))
        digits = text[2:] if text.startswith("0x") else text
        return cls(bytes.fromhex(digits))

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"Handle({self.hex()})"


ZERO_HANDLE = Handle(bytes(HANDLE_SIZE))
