"""Property-based tests for line layout."""

from __future__ import annotations

from typing import Annotated, Any

import msgspec
from hypothesis import given, settings, strategies as st

from fixcsv import marshal, tag
from tests.test_constants import SAFE_ALPHABET

_field_strategy = st.tuples(
    st.integers(min_value=0, max_value=20),
    st.integers(min_value=0, max_value=12),
    st.text(alphabet=SAFE_ALPHABET, max_size=20),
)


def _record_type(layout: list[tuple[int, int, str]], malformed: int = 0) -> type:
    fields: list[tuple[str, Any, Any]] = [
        (f"f{index}", Annotated[str, tag(position, length)], value)
        for index, (position, length, value) in enumerate(layout)
    ]
    for index in range(malformed):
        fields.append((f"bad{index}", Annotated[str, tag(f"{index}:x")], "MALFORMED"))
    return msgspec.defstruct("Generated", fields)


def _expected(layout: list[tuple[int, int, str]]) -> bytes:
    ordered = sorted(layout, key=lambda item: item[0])
    return b"||".join(value.encode()[:length] for _, length, value in ordered)


@settings(max_examples=200)
@given(layout=st.lists(_field_strategy, max_size=8))
def test_fields_are_ordered_and_truncated(layout: list[tuple[int, int, str]]) -> None:
    record = _record_type(layout)()
    assert marshal(record) == _expected(layout)


@given(layout=st.lists(_field_strategy, min_size=1, max_size=8))
def test_each_field_is_a_prefix_of_its_value(layout: list[tuple[int, int, str]]) -> None:
    out = marshal(_record_type(layout)())
    segments = out.split(b"||")
    ordered = sorted(layout, key=lambda item: item[0])
    assert len(segments) == len(ordered)
    for segment, (_, length, value) in zip(segments, ordered):
        encoded = value.encode()
        assert len(segment) <= length
        assert encoded.startswith(segment)
        if len(encoded) <= length:
            assert segment == encoded


@given(
    layout=st.lists(_field_strategy, max_size=6),
    malformed=st.integers(min_value=1, max_value=3),
)
def test_malformed_fields_never_appear(layout: list[tuple[int, int, str]], malformed: int) -> None:
    out = marshal(_record_type(layout, malformed)())
    assert b"MALFORMED" not in out
    assert out == _expected(layout)


@given(count=st.integers(min_value=0, max_value=30))
def test_sequence_has_n_minus_one_newlines(count: int) -> None:
    record_type = _record_type([(1, 3, "abc"), (2, 3, "def")])
    out = marshal([record_type() for _ in range(count)])
    assert out.count(b"\n") == max(count - 1, 0)
