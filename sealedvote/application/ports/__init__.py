"""Ports (interfaces) for the collaborators the vote client depends on."""

from sealedvote.application.ports.decryption_oracle import DecryptionOracleProtocol
from sealedvote.application.ports.decryption_signer import DecryptionSignerProtocol
from sealedvote.application.ports.encryption import EncryptionProtocol
from sealedvote.application.ports.time_authority import TimeAuthorityProtocol
from sealedvote.application.ports.vote_ledger import (
    AccessControlProtocol,
    InputProofVerifierProtocol,
    VoteLedgerProtocol,
    WriteListener,
)

__all__: list[str] = [
    "AccessControlProtocol",
    "DecryptionOracleProtocol",
    "DecryptionSignerProtocol",
    "EncryptionProtocol",
    "InputProofVerifierProtocol",
    "TimeAuthorityProtocol",
    "VoteLedgerProtocol",
    "WriteListener",
]
