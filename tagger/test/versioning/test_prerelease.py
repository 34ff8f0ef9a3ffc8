from __future__ import annotations

import pytest

from tagger.core.result import Err, Ok
from tagger.versioning.prerelease import PrereleaseTag, decode, encode, parse_label


def test_encode_formats_label() -> None:
    assert str(encode(0)) == "pre0"
    assert str(encode(12)) == "pre12"


def test_decode() -> None:
    assert decode("pre0") == Ok(0)
    assert decode("pre12") == Ok(12)
    assert decode("pre4294967295") == Ok(4294967295)


@pytest.mark.parametrize(
    "label",
    [
        "beta.1",
        "pre",
        "pre-1",
        "pre01",
        "PRE1",
        "rc1",
        "pre1a",
        "1",
        "pre1\n",
        "",
        "pre4294967296",
        "pre99999999999",
    ],
)
def test_decode_rejects_other_conventions(label: str) -> None:
    result = decode(label)
    assert isinstance(result, Err)
    assert result.error.kind == "malformed"


def test_decode_encode_roundtrip() -> None:
    for counter in (0, 1, 9, 10, 99, 100, 12345):
        assert decode(str(encode(counter))) == Ok(counter)


def test_parse_label() -> None:
    assert parse_label("pre7") == Ok(PrereleaseTag(7))
    assert isinstance(parse_label("alpha"), Err)


def test_negative_counter_is_rejected() -> None:
    with pytest.raises(ValueError):
        encode(-1)


def test_advance_returns_new_tag() -> None:
    tag = PrereleaseTag(2)
    assert tag.advance(100) == PrereleaseTag(102)
    assert tag == PrereleaseTag(2)


def test_ordering_by_counter() -> None:
    assert PrereleaseTag(2) < PrereleaseTag(10)
