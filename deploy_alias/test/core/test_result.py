"""Tests for deploy_alias.core.result module."""

import pytest

from deploy_alias.core.result import Err, Ok


class TestOk:
    def test_map(self) -> None:
        assert Ok(21).map(lambda x: x * 2) == Ok(42)

    def test_frozen(self) -> None:
        result = Ok(42)
        with pytest.raises(AttributeError):
            result.value = 0  # type: ignore[misc]

    def test_repr(self) -> None:
        assert repr(Ok(42)) == "Ok(42)"


class TestErr:
    def test_map_is_noop(self) -> None:
        assert Err("boom").map(lambda x: x * 2) == Err("boom")

    def test_repr(self) -> None:
        assert repr(Err("boom")) == "Err('boom')"


def test_pattern_matching() -> None:
    match Err("boom"):
        case Ok(value):
            pytest.fail(f"unexpected Ok({value})")
        case Err(error):
            assert error == "boom"
