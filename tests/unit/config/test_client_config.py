"""Unit tests for vote client configuration."""

from datetime import timedelta

import pytest

from sealedvote.config.client_config import (
    DEFAULT_VOTE_CLIENT_CONFIG,
    TEST_VOTE_CLIENT_CONFIG,
    AuthorizationConfig,
    VoteClientConfig,
)


class TestAuthorizationConfig:
    def test_defaults(self) -> None:
        config = AuthorizationConfig()

        assert config.validity_days == 365
        assert config.validity_duration == timedelta(days=365)
        assert config.signing_timeout_seconds == 120.0

    @pytest.mark.parametrize(
        "kwargs",
        [{"validity_days": 0}, {"signing_timeout_seconds": 0}, {"signing_timeout_seconds": -1.0}],
    )
    def test_invalid_values_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            AuthorizationConfig(**kwargs)

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEALEDVOTE_AUTH_VALIDITY_DAYS", "7")
        monkeypatch.setenv("SEALEDVOTE_SIGNING_TIMEOUT", "30.5")

        config = AuthorizationConfig.from_environment()

        assert config.validity_duration == timedelta(days=7)
        assert config.signing_timeout_seconds == 30.5


class TestVoteClientConfig:
    def test_defaults(self) -> None:
        assert DEFAULT_VOTE_CLIENT_CONFIG.max_choice == 6
        assert DEFAULT_VOTE_CLIENT_CONFIG.oracle_timeout_seconds == 60.0
        assert DEFAULT_VOTE_CLIENT_CONFIG.authorization == AuthorizationConfig()

    def test_test_preset_is_short_lived(self) -> None:
        assert TEST_VOTE_CLIENT_CONFIG.ledger_timeout_seconds < 60.0
        assert TEST_VOTE_CLIENT_CONFIG.authorization.validity_days == 1

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_choice": 0}, {"oracle_timeout_seconds": 0}, {"ledger_timeout_seconds": -5.0}],
    )
    def test_invalid_values_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            VoteClientConfig(**kwargs)

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEALEDVOTE_MAX_CHOICE", "9")
        monkeypatch.setenv("SEALEDVOTE_ORACLE_TIMEOUT", "15")
        monkeypatch.setenv("SEALEDVOTE_AUTH_VALIDITY_DAYS", "30")

        config = VoteClientConfig.from_environment()

        assert config.max_choice == 9
        assert config.oracle_timeout_seconds == 15.0
        assert config.ledger_timeout_seconds == 60.0
        assert config.authorization.validity_days == 30

    def test_unparseable_environment_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEALEDVOTE_MAX_CHOICE", "many")

        assert VoteClientConfig.from_environment().max_choice == 6
