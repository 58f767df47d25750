"""Integration test configuration.

Every test gets a fresh local deployment: in-memory ledger, mock FHE
backend and mock wallet/oracle, all driven by a fake clock.
"""

import pytest

from sealedvote.bootstrap.local_session import LocalDeployment, create_local_session
from sealedvote.config.client_config import TEST_VOTE_CLIENT_CONFIG
from sealedvote.infrastructure.stubs import MockFheBackend
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture
def deployment(fake_time_authority: FakeTimeAuthority) -> LocalDeployment:
    return create_local_session(
        config=TEST_VOTE_CLIENT_CONFIG,
        time_authority=fake_time_authority,
        backend=MockFheBackend(secret=b"\x2a" * 32),
    )
