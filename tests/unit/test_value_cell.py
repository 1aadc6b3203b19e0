from __future__ import annotations

from typed_options import Value


def test_value_records_type_at_creation() -> None:
    cell = Value(3)
    assert cell.kind is int
    assert cell.matches(int)
    assert not cell.matches(float)


def test_value_accessors_follow_exact_match() -> None:
    cell = Value("prod")

    assert cell.get(str) == "prod"
    assert cell.get_ref(str) == "prod"
    assert cell.get_mut(str) == "prod"
    assert cell.get(bytes) is None
    assert cell.get_ref(bytes) is None
    assert cell.get_mut(bytes) is None


def test_value_set_retags_unconditionally() -> None:
    cell = Value(3)
    cell.set("three")

    assert cell.kind is str
    assert cell.get(int) is None
    assert cell.get(str) == "three"


def test_value_update_can_change_type() -> None:
    cell = Value(3)

    assert cell.update(int, str) is True
    assert cell.kind is str
    assert cell.get(str) == "3"
    assert cell.update(int, str) is False


def test_value_get_mut_exposes_mutable_payload() -> None:
    cell = Value({"a": 1})
    payload = cell.get_mut(dict)
    assert payload is not None
    payload["b"] = 2

    assert cell.get(dict) == {"a": 1, "b": 2}


def test_value_repr() -> None:
    assert repr(Value(3)) == "Value(int, 3)"
