"""Application services for SealedVote."""

from sealedvote.application.services.authorization_cache import AuthorizationCache
from sealedvote.application.services.client_orchestrator import ClientOrchestrator
from sealedvote.application.services.decryption_coordinator import DecryptionCoordinator
from sealedvote.application.services.decryption_result_cache import DecryptionResultCache
from sealedvote.application.services.submission_coordinator import SubmissionCoordinator
from sealedvote.application.services.time_authority_service import SystemTimeAuthority
from sealedvote.application.services.voting_session import VotingSession

__all__: list[str] = [
    "AuthorizationCache",
    "ClientOrchestrator",
    "DecryptionCoordinator",
    "DecryptionResultCache",
    "SubmissionCoordinator",
    "SystemTimeAuthority",
    "VotingSession",
]
