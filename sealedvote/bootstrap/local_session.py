"""Wire a complete voting session over the in-memory ledger and mock
collaborators.

Used for local development and the integration tests. Every component
shares one MockFheBackend so the mock oracle can decrypt what the mock
encryption client produced.
"""

from __future__ import annotations

from dataclasses import dataclass

from sealedvote.application.ports.time_authority import TimeAuthorityProtocol
from sealedvote.application.services.time_authority_service import SystemTimeAuthority
from sealedvote.application.services.voting_session import VotingSession
from sealedvote.config.client_config import DEFAULT_VOTE_CLIENT_CONFIG, VoteClientConfig
from sealedvote.infrastructure.ledger.in_memory_vote_ledger import InMemoryVoteLedger
from sealedvote.infrastructure.stubs import (
    MockDecryptionOracle,
    MockDecryptionSigner,
    MockEncryptionClient,
    MockFheBackend,
)

DEFAULT_LOCAL_CONTRACT_ID = "0x5fbdb2315678afecb367f032d93f642f64180aa3"


@dataclass
class LocalDeployment:
    """A local session plus handles on its collaborators for inspection."""

    session: VotingSession
    ledger: InMemoryVoteLedger
    backend: MockFheBackend
    encryption: MockEncryptionClient
    signer: MockDecryptionSigner
    oracle: MockDecryptionOracle


def create_local_session(
    contract_id: str = DEFAULT_LOCAL_CONTRACT_ID,
    config: VoteClientConfig = DEFAULT_VOTE_CLIENT_CONFIG,
    time_authority: TimeAuthorityProtocol | None = None,
    backend: MockFheBackend | None = None,
) -> LocalDeployment:
    """Build a VotingSession backed entirely by in-process components."""
    clock = time_authority or SystemTimeAuthority()
    backend = backend or MockFheBackend()
    ledger = InMemoryVoteLedger(contract_id, proof_verifier=backend, access_control=backend)
    encryption = MockEncryptionClient(backend)
    signer = MockDecryptionSigner(backend)
    oracle = MockDecryptionOracle(backend, clock)
    session = VotingSession(
        ledger=ledger,
        encryption=encryption,
        signer=signer,
        oracle=oracle,
        time_authority=clock,
        config=config,
    )
    return LocalDeployment(
        session=session,
        ledger=ledger,
        backend=backend,
        encryption=encryption,
        signer=signer,
        oracle=oracle,
    )
