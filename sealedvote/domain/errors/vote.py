"""Errors raised before a vote reaches the ledger."""

from __future__ import annotations

from sealedvote.domain.exceptions import ErrorKind, SealedVoteError


class InvalidChoiceError(SealedVoteError):
    """Raised when a plaintext choice is outside the ballot's choice domain.

    Attributes:
        choice: The rejected value.
        max_choice: Highest valid choice.
    """

    kind = ErrorKind.INVALID_CHOICE

    def __init__(self, choice: int, max_choice: int) -> None:
        self.choice = choice
        self.max_choice = max_choice
        super().__init__(f"Choice {choice} is outside 1..{max_choice}")


class EncryptionFailedError(SealedVoteError):
    """Raised when the encryption collaborator produced no usable ciphertext."""

    kind = ErrorKind.ENCRYPTION_FAILED
    retryable = True

    def __init__(self, cause: str = "") -> None:
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Encryption failed{detail}")
