"""Authorization cache: reuse signed decryption tokens while they are valid.

Signing is expensive and user-interactive. A token cached for
(voter, scoped_contracts) is returned unchanged while
now < issued_at + validity_duration; only a miss or an expired entry
triggers a new signature. Concurrent requests for the same key share one
signing request.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable

from structlog import get_logger

from sealedvote.application.ports.decryption_signer import DecryptionSignerProtocol
from sealedvote.application.ports.time_authority import TimeAuthorityProtocol
from sealedvote.config.client_config import AuthorizationConfig
from sealedvote.domain.errors import AuthorizationDeniedError
from sealedvote.domain.models.authorization import AuthorizationToken, DecryptionKeypair
from sealedvote.domain.models.handle import normalize_identity

logger = get_logger(__name__)

CacheKey = tuple[str, frozenset[str]]


def _scope(contracts: Iterable[str]) -> frozenset[str]:
    scope = frozenset(normalize_identity(c) for c in contracts)
    if not scope:
        raise ValueError("scoped_contracts must not be empty")
    return scope


class AuthorizationCache:
    """Session-scoped cache of decryption authorization tokens.

    Attributes:
        signing_requests: Number of signatures requested so far.
    """

    def __init__(
        self,
        signer: DecryptionSignerProtocol,
        keypair_factory: Callable[[], DecryptionKeypair],
        time_authority: TimeAuthorityProtocol,
        config: AuthorizationConfig | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            signer: Collaborator that asks the voter for a signature.
            keypair_factory: Produces the keypair each new token is bound to.
            time_authority: Clock used for issue times and expiry checks.
            config: Validity window and signing timeout.
        """
        self._signer = signer
        self._keypair_factory = keypair_factory
        self._time = time_authority
        self._config = config or AuthorizationConfig()
        self._tokens: dict[CacheKey, AuthorizationToken] = {}
        self._locks: dict[CacheKey, asyncio.Lock] = {}
        # Bumped by invalidate(); a signature that completes under an
        # older generation is returned to its caller but not cached.
        self._generations: dict[str, int] = {}
        self.signing_requests = 0

    def peek(
        self, voter_id: str, scoped_contracts: Iterable[str]
    ) -> AuthorizationToken | None:
        """Return the cached token if it is still valid, without signing."""
        key = (normalize_identity(voter_id), _scope(scoped_contracts))
        return self._valid_entry(key)

    async def get_or_create(
        self, voter_id: str, scoped_contracts: Iterable[str]
    ) -> AuthorizationToken:
        """Return a valid token for (voter, scoped_contracts), signing if needed.

        Raises:
            AuthorizationDeniedError: The signer refused, failed or timed out.
                Nothing is cached in that case.
        """
        key = (normalize_identity(voter_id), _scope(scoped_contracts))
        log = logger.bind(voter_id=key[0], scoped_contracts=sorted(key[1]))

        token = self._valid_entry(key)
        if token is not None:
            log.debug("authorization_cache_hit")
            return token

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            # Another caller may have signed while we waited for the lock.
            token = self._valid_entry(key)
            if token is not None:
                log.debug("authorization_cache_hit", after_wait=True)
                return token

            generation = self._generations.get(key[0], 0)
            token = await self._issue(key, log)
            if self._generations.get(key[0], 0) == generation:
                self._tokens[key] = token
                log.info("authorization_cached", expires_at=token.expires_at.isoformat())
            else:
                log.info("authorization_not_cached_invalidated")
            return token

    def invalidate(self, voter_id: str) -> int:
        """Drop every cached token for voter_id.

        Used on account or network switch.

        Returns:
            Number of tokens removed.
        """
        voter = normalize_identity(voter_id)
        self._generations[voter] = self._generations.get(voter, 0) + 1
        stale = [key for key in self._tokens if key[0] == voter]
        for key in stale:
            del self._tokens[key]
        logger.info("authorization_invalidated", voter_id=voter, tokens_removed=len(stale))
        return len(stale)

    def evict_expired(self) -> int:
        """Remove expired tokens. Returns the number removed."""
        now = self._time.now()
        expired = [key for key, token in self._tokens.items() if not token.is_valid(now)]
        for key in expired:
            del self._tokens[key]
        if expired:
            logger.debug("authorization_expired_evicted", count=len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._tokens)

    def _valid_entry(self, key: CacheKey) -> AuthorizationToken | None:
        token = self._tokens.get(key)
        if token is None:
            return None
        if not token.is_valid(self._time.now()):
            del self._tokens[key]
            logger.debug("authorization_cache_expired", voter_id=key[0])
            return None
        return token

    async def _issue(self, key: CacheKey, log) -> AuthorizationToken:
        voter, scope = key
        keypair = self._keypair_factory()
        issued_at = self._time.now()
        duration = self._config.validity_duration

        self.signing_requests += 1
        log.info("authorization_signing_requested")
        try:
            signature = await asyncio.wait_for(
                self._signer.sign(voter, keypair.public_key, scope, issued_at, duration),
                timeout=self._config.signing_timeout_seconds,
            )
        except AuthorizationDeniedError:
            log.warning("authorization_denied", reason="refused")
            raise
        except TimeoutError as exc:
            log.warning("authorization_denied", reason="timeout")
            raise AuthorizationDeniedError(voter, "timeout") from exc
        except Exception as exc:
            log.warning("authorization_denied", reason="signer_error", error=str(exc))
            raise AuthorizationDeniedError(voter, f"signer error: {exc}") from exc

        if not signature:
            log.warning("authorization_denied", reason="empty_signature")
            raise AuthorizationDeniedError(voter, "empty signature")

        return AuthorizationToken(
            voter_id=voter,
            public_key=keypair.public_key,
            private_key=keypair.private_key,
            signature=signature,
            issued_at=issued_at,
            validity_duration=duration,
            scoped_contracts=scope,
        )
