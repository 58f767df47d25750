"""Local stand-ins for the external collaborators (development and tests).

None of these provide confidentiality: MockFheBackend keeps every
plaintext in memory so that the mock oracle can "decrypt" it.
"""

from sealedvote.infrastructure.stubs.mock_decryption_oracle import MockDecryptionOracle
from sealedvote.infrastructure.stubs.mock_decryption_signer import MockDecryptionSigner
from sealedvote.infrastructure.stubs.mock_encryption_client import MockEncryptionClient
from sealedvote.infrastructure.stubs.mock_fhe_backend import MockFheBackend

__all__: list[str] = [
    "MockDecryptionOracle",
    "MockDecryptionSigner",
    "MockEncryptionClient",
    "MockFheBackend",
]
