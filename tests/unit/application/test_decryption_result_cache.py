"""Unit tests for DecryptionResultCache."""

import pytest

from sealedvote.application.services.decryption_result_cache import DecryptionResultCache
from sealedvote.domain.models.handle import HANDLE_SIZE, ZERO_HANDLE, Handle

FIRST = Handle(b"\x01" * HANDLE_SIZE)
SECOND = Handle(b"\x02" * HANDLE_SIZE)


class TestDecryptionResultCache:
    def test_absent_handle_is_not_decrypted(self) -> None:
        cache = DecryptionResultCache()

        assert cache.get(FIRST) is None
        assert FIRST not in cache
        assert len(cache) == 0

    def test_record_adds_new_entries(self) -> None:
        cache = DecryptionResultCache()

        added = cache.record({FIRST: 3, SECOND: 5})

        assert added == 2
        assert cache.get(FIRST) == 3
        assert set(cache) == {FIRST, SECOND}

    def test_existing_entry_is_never_replaced(self) -> None:
        cache = DecryptionResultCache()
        cache.record({FIRST: 3})

        added = cache.record({FIRST: 4})

        assert added == 0
        assert cache.get(FIRST) == 3

    def test_zero_handle_is_not_cached(self) -> None:
        cache = DecryptionResultCache()

        assert cache.record({ZERO_HANDLE: 0}) == 0
        assert ZERO_HANDLE not in cache

    def test_view_is_read_only(self) -> None:
        cache = DecryptionResultCache()
        cache.record({FIRST: 1})
        view = cache.view()

        with pytest.raises(TypeError):
            view[SECOND] = 2  # type: ignore[index]

        cache.record({SECOND: 2})
        assert view[SECOND] == 2
