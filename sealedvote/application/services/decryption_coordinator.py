"""Decryption coordinator: resolve handles to cleartexts through the oracle.

Resolution order for each request:
1. ZERO_HANDLE -> NO_VOTE_CLEARTEXT locally (nothing to decrypt)
2. Handle already cached -> cached cleartext
3. Everything else -> one batched oracle call scoped to the token

Results are recorded by handle. Whether a handle is still the voter's
current vote is the orchestrator's concern, not this coordinator's.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from structlog import get_logger

from sealedvote.application.ports.decryption_oracle import DecryptionOracleProtocol
from sealedvote.application.ports.time_authority import TimeAuthorityProtocol
from sealedvote.application.services.decryption_result_cache import DecryptionResultCache
from sealedvote.domain.errors import (
    AuthorizationExpiredError,
    HandleUnknownToOracleError,
    OracleUnavailableError,
)
from sealedvote.domain.models.authorization import AuthorizationToken
from sealedvote.domain.models.decryption import NO_VOTE_CLEARTEXT, DecryptionRequest
from sealedvote.domain.models.handle import ZERO_HANDLE, Handle, normalize_identity

logger = get_logger(__name__)

DEFAULT_ORACLE_TIMEOUT_SECONDS = 60.0


class DecryptionCoordinator:
    """Dispatches decryption requests and fills the result cache."""

    def __init__(
        self,
        oracle: DecryptionOracleProtocol,
        results: DecryptionResultCache,
        time_authority: TimeAuthorityProtocol,
        oracle_timeout_seconds: float = DEFAULT_ORACLE_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the coordinator.

        Args:
            oracle: Decryption oracle collaborator.
            results: Session result cache this coordinator writes to.
            time_authority: Clock for the pre-dispatch expiry check.
            oracle_timeout_seconds: Upper bound on one oracle round trip.
        """
        self._oracle = oracle
        self._results = results
        self._time = time_authority
        self._timeout = oracle_timeout_seconds

    @property
    def results(self) -> DecryptionResultCache:
        return self._results

    async def resolve(
        self,
        requests: Sequence[DecryptionRequest],
        token: AuthorizationToken,
    ) -> dict[Handle, int]:
        """Resolve every request to its cleartext.

        Args:
            requests: Handles to decrypt, with the contract each belongs to.
            token: Authorization used for the oracle call.

        Returns:
            Mapping of every requested handle to its cleartext. ZERO_HANDLE
            maps to NO_VOTE_CLEARTEXT.

        Raises:
            AuthorizationExpiredError: token lapsed or does not cover a contract.
            OracleUnavailableError: transient oracle failure or timeout.
            HandleUnknownToOracleError: the oracle cannot decrypt a handle.
        """
        log = logger.bind(voter_id=token.voter_id, requested=len(requests))
        resolved: dict[Handle, int] = {}
        pending: dict[Handle, DecryptionRequest] = {}

        for request in requests:
            handle = request.handle
            if handle.is_zero:
                resolved[ZERO_HANDLE] = NO_VOTE_CLEARTEXT
                continue
            cached = self._results.get(handle)
            if cached is not None:
                resolved[handle] = cached
                continue
            pending.setdefault(handle, request)

        if not pending:
            log.debug("decryption_resolved_locally", resolved=len(resolved))
            return resolved

        contracts = {normalize_identity(r.contract_id) for r in pending.values()}
        if not token.covers(contracts):
            log.warning("decryption_scope_mismatch", contracts=sorted(contracts))
            raise AuthorizationExpiredError(token.voter_id, "scope_mismatch")
        if not token.is_valid(self._time.now()):
            log.warning("decryption_token_expired")
            raise AuthorizationExpiredError(token.voter_id, "expired")

        batch = list(pending.values())
        log.info("decryption_dispatched", batch_size=len(batch))
        try:
            cleartexts = await asyncio.wait_for(
                self._oracle.user_decrypt(batch, token),
                timeout=self._timeout,
            )
        except TimeoutError as exc:
            log.warning("decryption_oracle_timeout")
            raise OracleUnavailableError("timed out") from exc
        except OSError as exc:
            log.warning("decryption_oracle_unreachable", error=str(exc))
            raise OracleUnavailableError(str(exc)) from exc

        missing = [h for h in pending if h not in cleartexts]
        if missing:
            log.warning("decryption_result_incomplete", missing=len(missing))
            raise HandleUnknownToOracleError(missing[0].hex(), "missing_from_response")

        fresh = {handle: int(cleartexts[handle]) for handle in pending}
        added = self._results.record(fresh)
        resolved.update(fresh)
        log.info("decryption_completed", cached=added)
        return resolved
