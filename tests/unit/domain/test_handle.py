"""Unit tests for the Handle value type and identity normalisation."""

from __future__ import annotations

import pytest

from sealedvote.domain.models.handle import (
    HANDLE_SIZE,
    ZERO_HANDLE,
    Handle,
    normalize_identity,
)


class TestHandle:
    def test_zero_handle_is_zero(self) -> None:
        assert ZERO_HANDLE.is_zero
        assert ZERO_HANDLE.value == bytes(HANDLE_SIZE)

    def test_non_zero_handle(self) -> None:
        handle = Handle(b"\x01" * HANDLE_SIZE)
        assert not handle.is_zero

    def test_wrong_size_rejected(self) -> None:
        with pytest.raises(ValueError, match="32 bytes"):
            Handle(b"\x01" * 31)

    def test_hex_rendering(self) -> None:
        handle = Handle(bytes(range(32)))
        assert handle.hex() == "0x" + bytes(range(32)).hex()
        assert str(handle) == handle.hex()

    def test_from_hex_parses_full_width(self) -> None:
        handle = Handle(b"\xab" * HANDLE_SIZE)
        assert Handle.from_hex(handle.hex()) == handle
        assert Handle.from_hex(handle.hex().upper().replace("0X", "0x")) == handle

    @pytest.mark.parametrize("spelling", ["0x", "0x0", "", "0x" + "00" * 32])
    def test_zero_spellings_parse_as_zero_handle(self, spelling: str) -> None:
        assert Handle.from_hex(spelling) == ZERO_HANDLE

    def test_handles_are_hashable_and_compare_by_value(self) -> None:
        a = Handle(b"\x07" * HANDLE_SIZE)
        b = Handle(b"\x07" * HANDLE_SIZE)
        assert a == b
        assert {a: 1}[b] == 1


class TestNormalizeIdentity:
    def test_lowercases_and_strips(self) -> None:
        assert normalize_identity("  0xABCdef ") == "0xabcdef"

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            normalize_identity("   ")
