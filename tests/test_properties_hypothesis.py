from __future__ import annotations

import pytest

hypothesis = pytest.importorskip("hypothesis", reason="hypothesis is a test optional dependency")
from hypothesis import given, strategies as st  # type: ignore

from typed_options import Options


names = st.text(min_size=1, max_size=12)
payloads = st.one_of(
    st.integers(),
    st.booleans(),
    st.text(max_size=20),
    st.floats(allow_nan=False),
    st.none(),
    st.lists(st.integers(), max_size=5),
    st.dictionaries(st.text(max_size=5), st.integers(), max_size=5),
)
kinds = st.sampled_from([int, bool, str, float, type(None), list, dict, bytes])


@given(name=names, value=payloads)
def test_set_then_get_round_trip(name, value):
    options = Options().set(name, value)
    kind = type(value)

    assert options.get(name, kind) == value
    assert options.get_ref(name, kind) == value
    assert options.get(name, kind) == options.get(name, kind)


@given(name=names, value=payloads, kind=kinds)
def test_other_kinds_are_absent(name, value, kind):
    options = Options().set(name, value)
    if kind is type(value):
        return

    assert options.get(name, kind) is None
    assert options.get_ref(name, kind) is None
    assert options.has(name)


@given(name=names, first=payloads, second=payloads)
def test_overwrite_keeps_only_last_value(name, first, second):
    options = Options().set(name, first).set(name, second)

    assert options.kind_of(name) is type(second)
    assert options.get(name, type(second)) == second
    assert list(options.names()) == [name]


@given(keys=st.sets(names, max_size=8), other=names)
def test_names_match_inserted_keys(keys, other):
    options = Options()
    for key in keys:
        options.set(key, key)

    listed = list(options.names())
    assert sorted(listed) == sorted(keys)
    assert options.has(other) == (other in keys)
