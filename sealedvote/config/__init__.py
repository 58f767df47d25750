"""Configuration module for SealedVote.

Available Configurations:
- AuthorizationConfig: Decryption token window and signing timeout
- VoteClientConfig: Choice domain and collaborator timeouts
"""

from sealedvote.config.client_config import (
    DEFAULT_VOTE_CLIENT_CONFIG,
    TEST_VOTE_CLIENT_CONFIG,
    AuthorizationConfig,
    VoteClientConfig,
)

__all__ = [
    "AuthorizationConfig",
    "VoteClientConfig",
    "DEFAULT_VOTE_CLIENT_CONFIG",
    "TEST_VOTE_CLIENT_CONFIG",
]
