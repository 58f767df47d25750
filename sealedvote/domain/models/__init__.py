"""Domain models for SealedVote."""

from sealedvote.domain.models.authorization import AuthorizationToken, DecryptionKeypair
from sealedvote.domain.models.decryption import (
    NO_VOTE_CLEARTEXT,
    DecryptionRequest,
    RevealedVote,
)
from sealedvote.domain.models.handle import (
    HANDLE_SIZE,
    ZERO_HANDLE,
    ContractId,
    Handle,
    VoterId,
    normalize_identity,
)
from sealedvote.domain.models.ledger import (
    EncryptedInput,
    LedgerWriteReceipt,
    SubmissionRequest,
    VoterRecord,
)
from sealedvote.domain.models.orchestrator_state import (
    OrchestratorSnapshot,
    RevealPhase,
    SubmitPhase,
)
from sealedvote.domain.models.vote_choice import (
    DEFAULT_MAX_CHOICE,
    ENCODING_BY_OPERATION,
    CiphertextEncoding,
    LedgerOperation,
    validate_choice,
)

__all__: list[str] = [
    "AuthorizationToken",
    "CiphertextEncoding",
    "ContractId",
    "DEFAULT_MAX_CHOICE",
    "DecryptionKeypair",
    "DecryptionRequest",
    "ENCODING_BY_OPERATION",
    "EncryptedInput",
    "HANDLE_SIZE",
    "Handle",
    "LedgerOperation",
    "LedgerWriteReceipt",
    "NO_VOTE_CLEARTEXT",
    "OrchestratorSnapshot",
    "RevealPhase",
    "RevealedVote",
    "SubmissionRequest",
    "SubmitPhase",
    "VoterId",
    "VoterRecord",
    "ZERO_HANDLE",
    "normalize_identity",
    "validate_choice",
]
