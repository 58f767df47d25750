"""Append-only cache of decrypted cleartexts, keyed by handle.

A handle's ciphertext is immutable once minted, so its cleartext never
changes and entries are kept for the whole session. Absence means "not
decrypted yet"; a stored value is never replaced.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from structlog import get_logger

from sealedvote.domain.models.handle import Handle

logger = get_logger(__name__)


class DecryptionResultCache:
    """Session-wide handle -> cleartext mapping.

    Only DecryptionCoordinator records into this cache; everything else
    reads it.
    """

    def __init__(self) -> None:
        self._results: dict[Handle, int] = {}

    def get(self, handle: Handle) -> int | None:
        return self._results.get(handle)

    def record(self, results: Mapping[Handle, int]) -> int:
        """Add cleartexts for handles not cached yet.

        Existing entries are kept as they are.

        Returns:
            Number of new entries.
        """
        added = 0
        for handle, clear in results.items():
            if handle.is_zero:
                continue
            existing = self._results.get(handle)
            if existing is None:
                self._results[handle] = int(clear)
                added += 1
            elif existing != clear:
                logger.warning(
                    "decryption_result_conflict_ignored",
                    handle=handle.hex(),
                )
        return added

    def view(self) -> Mapping[Handle, int]:
        """Read-only view of the cache."""
        return MappingProxyType(self._results)

    def __contains__(self, handle: object) -> bool:
        return handle in self._results

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[Handle]:
        return iter(self._results)
