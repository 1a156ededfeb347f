from __future__ import annotations

from urllib.parse import parse_qsl

import pytest

from core.domain.params import Optionals, coerce_value


def test_encode_round_trips_through_query_parsing():
    opts = Optionals()
    opts.add("status", "hola mundo & más")
    opts.add("count", 200)
    opts.add("trim_user", True)
    opts.add("lat", 37.7821120598956)
    opts.add("since_id", 9007199254740993)

    parsed = dict(parse_qsl(opts.encode(), keep_blank_values=True))

    assert parsed == {
        "status": "hola mundo & más",
        "count": "200",
        "trim_user": "true",
        "lat": "37.7821120598956",
        "since_id": "9007199254740993",
    }


def test_encode_escapes_space_and_unicode():
    opts = Optionals().add("q", "a b/ñ")

    assert opts.encode() == "q=a%20b%2F%C3%B1"


def test_encode_sorts_keys_and_keeps_value_order():
    opts = Optionals().add("z", "1").add("a", "2").add("z", "0")

    assert opts.encode() == "a=2&z=1&z=0"


def test_add_appends_and_set_replaces():
    opts = Optionals().add("id", 1).add("id", 2)
    assert opts.get_all("id") == ["1", "2"]

    opts.set("id", 3)
    assert opts.get_all("id") == ["3"]
    assert opts.get("id") == "3"


def test_booleans_are_lowercase_words():
    assert coerce_value(False) == "false"
    assert coerce_value(True) == "true"


@pytest.mark.parametrize("value", [None, b"bytes", ["a"], {"a": 1}, object()])
def test_unsupported_types_fail_fast(value):
    with pytest.raises(TypeError):
        Optionals().add("x", value)


def test_is_empty_and_len():
    opts = Optionals()
    assert opts.is_empty()
    assert opts.encode() == ""

    opts.add("a", "1")
    assert not opts.is_empty()
    assert len(opts) == 1
    assert "a" in opts


def test_copy_is_independent():
    original = Optionals().add("count", 5)
    clone = original.copy().set("count", 10).add("page", 2)

    assert original.get_all("count") == ["5"]
    assert "page" not in original
    assert clone.get("count") == "10"


def test_from_mapping_and_remove():
    opts = Optionals.from_mapping({"screen_name": "jack", "count": 3})
    opts.remove("count")
    opts.remove("missing")

    assert opts.items() == [("screen_name", "jack")]
