"""Tests for zci.core.result module."""

from __future__ import annotations

import pytest

from zci.core.result import Err, Ok, Result, is_err, is_ok


def _half(n: int) -> Result[int, str]:
    if n % 2:
        return Err(f"{n} is odd")
    return Ok(n // 2)


class TestOk:
    def test_value_access(self) -> None:
        result = Ok(3)
        assert result.is_ok() is True
        assert result.is_err() is False
        assert result.unwrap() == 3
        assert result.unwrap_or(0) == 3

    def test_map_and_flat_map(self) -> None:
        assert Ok(4).map(lambda v: v + 1) == Ok(5)
        assert Ok(4).flat_map(_half) == Ok(2)
        assert Ok(3).flat_map(_half) == Err("3 is odd")


class TestErr:
    def test_error_access(self) -> None:
        result: Err[str] = Err("boom")
        assert result.is_err() is True
        assert result.unwrap_or(7) == 7
        with pytest.raises(ValueError, match="boom"):
            result.unwrap()

    def test_map_err(self) -> None:
        assert Err("boom").map_err(str.upper) == Err("BOOM")
        assert Err("boom").map(lambda v: v) == Err("boom")


def test_type_guards() -> None:
    assert is_ok(_half(2)) is True
    assert is_err(_half(3)) is True


def test_pattern_matching() -> None:
    match _half(8):
        case Ok(value):
            assert value == 4
        case Err(_):
            pytest.fail("expected Ok")
