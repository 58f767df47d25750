"""Voting session: process-wide caches and the active voter's orchestrator.

The authorization cache and the decryption result cache live here for the
whole session. Switching account closes the previous voter's orchestrator
(dropping in-flight results and its cached tokens) before the new one is
handed out. Nothing is persisted.
"""

from __future__ import annotations

from structlog import get_logger

from sealedvote.application.ports.decryption_oracle import DecryptionOracleProtocol
from sealedvote.application.ports.decryption_signer import DecryptionSignerProtocol
from sealedvote.application.ports.encryption import EncryptionProtocol
from sealedvote.application.ports.time_authority import TimeAuthorityProtocol
from sealedvote.application.ports.vote_ledger import VoteLedgerProtocol
from sealedvote.application.services.authorization_cache import AuthorizationCache
from sealedvote.application.services.client_orchestrator import ClientOrchestrator
from sealedvote.application.services.decryption_coordinator import DecryptionCoordinator
from sealedvote.application.services.decryption_result_cache import DecryptionResultCache
from sealedvote.application.services.submission_coordinator import SubmissionCoordinator
from sealedvote.config.client_config import DEFAULT_VOTE_CLIENT_CONFIG, VoteClientConfig
from sealedvote.domain.errors import SessionClosedError
from sealedvote.domain.models.handle import normalize_identity

logger = get_logger(__name__)


class VotingSession:
    """Wires the coordinators once and serves one active orchestrator.

    Attributes:
        authorization_cache: Tokens shared by every orchestrator of this session.
        results: Decrypted cleartexts shared by every orchestrator of this session.
    """

    def __init__(
        self,
        ledger: VoteLedgerProtocol,
        encryption: EncryptionProtocol,
        signer: DecryptionSignerProtocol,
        oracle: DecryptionOracleProtocol,
        time_authority: TimeAuthorityProtocol,
        config: VoteClientConfig = DEFAULT_VOTE_CLIENT_CONFIG,
    ) -> None:
        self._ledger = ledger
        self._encryption = encryption
        self._config = config
        self.results = DecryptionResultCache()
        self.authorization_cache = AuthorizationCache(
            signer=signer,
            keypair_factory=oracle.generate_keypair,
            time_authority=time_authority,
            config=config.authorization,
        )
        self._submission = SubmissionCoordinator(
            ledger, confirmation_timeout_seconds=config.ledger_timeout_seconds
        )
        self._decryption = DecryptionCoordinator(
            oracle,
            self.results,
            time_authority,
            oracle_timeout_seconds=config.oracle_timeout_seconds,
        )
        self._active: ClientOrchestrator | None = None
        self._closed = False

    @property
    def active(self) -> ClientOrchestrator | None:
        return self._active

    @property
    def is_closed(self) -> bool:
        return self._closed

    def connect(self, voter_id: str) -> ClientOrchestrator:
        """Return the orchestrator for voter_id, switching account if needed."""
        if self._closed:
            raise SessionClosedError()
        voter = normalize_identity(voter_id)
        if self._active is not None and not self._active.is_closed:
            if self._active.voter_id == voter:
                return self._active
            logger.info(
                "account_switched",
                previous_voter_id=self._active.voter_id,
                voter_id=voter,
            )
            self._active.close()

        self._active = ClientOrchestrator(
            voter_id=voter,
            ledger=self._ledger,
            encryption=self._encryption,
            submission=self._submission,
            authorization=self.authorization_cache,
            decryption=self._decryption,
            results=self.results,
            config=self._config,
        )
        return self._active

    def switch_account(self, voter_id: str) -> ClientOrchestrator:
        return self.connect(voter_id)

    def disconnect(self) -> None:
        """Close the active orchestrator, if any."""
        if self._active is not None:
            self._active.close()
            self._active = None

    def close(self) -> None:
        """End the session.

        The active orchestrator is closed and no voter can connect again.
        Both caches stay readable until the session object is dropped.
        """
        if self._closed:
            return
        self.disconnect()
        self._closed = True
        logger.info("voting_session_closed", cached_results=len(self.results))
