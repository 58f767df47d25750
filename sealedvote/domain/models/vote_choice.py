"""Plaintext choice domain and its static ciphertext encoding.

The choice domain is 1..max_choice. Zero is never a valid choice, so a
cleartext of 0 can only mean "no vote stored".
"""

from __future__ import annotations

from enum import Enum

from sealedvote.domain.errors.vote import InvalidChoiceError

DEFAULT_MAX_CHOICE = 6


class LedgerOperation(str, Enum):
    """Ledger operations that take an encrypted input."""

    SUBMIT_VOTE = "submitVote"


class CiphertextEncoding(str, Enum):
    """Encrypted integer types accepted by the ledger."""

    EBOOL = "ebool"
    EUINT8 = "euint8"
    EUINT16 = "euint16"
    EUINT32 = "euint32"
    EUINT64 = "euint64"

    @property
    def bit_width(self) -> int:
        return _BIT_WIDTHS[self]

    def validate(self, value: int) -> int:
        """Check that value fits this encoding.

        Raises:
            ValueError: If value is negative or too wide.
        """
        if value < 0 or value >= (1 << self.bit_width):
            raise ValueError(f"{value} does not fit in {self.value}")
        return value


_BIT_WIDTHS = {
    CiphertextEncoding.EBOOL: 1,
    CiphertextEncoding.EUINT8: 8,
    CiphertextEncoding.EUINT16: 16,
    CiphertextEncoding.EUINT32: 32,
    CiphertextEncoding.EUINT64: 64,
}

# Fixed at import time; a new ledger operation must be added here.
ENCODING_BY_OPERATION: dict[LedgerOperation, CiphertextEncoding] = {
    LedgerOperation.SUBMIT_VOTE: CiphertextEncoding.EUINT32,
}


def validate_choice(choice: int, max_choice: int = DEFAULT_MAX_CHOICE) -> int:
    """Return choice if it is a valid ballot entry.

    Raises:
        InvalidChoiceError: If choice is not an int in 1..max_choice.
    """
    if isinstance(choice, bool) or not isinstance(choice, int):
        raise InvalidChoiceError(choice, max_choice)  # type: ignore[arg-type]
    if choice < 1 or choice > max_choice:
        raise InvalidChoiceError(choice, max_choice)
    return choice
