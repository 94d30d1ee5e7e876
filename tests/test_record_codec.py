from __future__ import annotations

import pytest

from dynamo_codec import (
    AttributeType,
    AttributeValue,
    decode_record,
    decode_record_report,
    encode_record,
    marshal_item,
    unmarshal_item,
)


def _alice() -> dict:
    return {"name": "Alice", "age": 30, "tags": ["a", "b"], "active": True}


def test_record_encodes_field_by_field():
    item = encode_record(_alice())
    assert item["name"].kind is AttributeType.STRING
    assert item["age"] == AttributeValue.number("30")
    assert item["tags"] == AttributeValue.string_set(["a", "b"])
    assert item["active"] == AttributeValue.boolean(True)


def test_record_round_trip():
    assert decode_record(encode_record(_alice())) == _alice()


def test_unencodable_fields_are_kept_as_empty():
    item = encode_record({"name": "x", "callback": print, "missing": None})
    assert set(item) == {"name", "callback", "missing"}
    assert item["callback"].is_empty
    assert item["missing"].is_empty
    assert decode_record(item) == {"name": "x", "callback": None, "missing": None}


def test_missing_record_and_item_are_empty():
    assert encode_record(None) == {}
    assert decode_record(None) == {}
    assert decode_record({}) == {}
    assert unmarshal_item(None) == {}


def test_bad_field_does_not_abort_other_fields():
    item = {
        "price": AttributeValue.number("9.99"),
        "qty": AttributeValue.number("3"),
        "sku": AttributeValue.string("A-1"),
    }
    result = decode_record_report(item)
    assert result.value == {"price": None, "qty": 3, "sku": "A-1"}
    assert [d.path for d in result.defects] == ["price"]


def test_number_mode_applies_to_whole_record():
    item = encode_record({"price": 9.99, "qty": 3})
    assert decode_record(item, number_mode="native") == {"price": 9.99, "qty": 3}


def test_marshal_item_matches_low_level_client_shape():
    assert marshal_item(_alice()) == {
        "name": {"S": "Alice"},
        "age": {"N": "30"},
        "tags": {"SS": ["a", "b"]},
        "active": {"BOOL": True},
    }


def test_unmarshal_item_reads_low_level_client_shape():
    raw = {
        "PK": {"S": "USER#1"},
        "visits": {"N": "12"},
        "avatar": {"B": b"\x89PNG"},
        "prefs": {"M": {"theme": {"S": "dark"}, "beta": {"BOOL": False}}},
        "history": {"L": [{"N": "1"}, {"S": "two"}]},
        "gone": {"NULL": True},
    }
    assert unmarshal_item(raw) == {
        "PK": "USER#1",
        "visits": 12,
        "avatar": b"\x89PNG",
        "prefs": {"theme": "dark", "beta": False},
        "history": [1, "two"],
        "gone": None,
    }


def test_marshal_then_unmarshal_round_trip():
    record = {"id": "o-1", "lines": [{"sku": "a", "qty": 2}, {"sku": "b", "qty": 1}], "blob": b"z"}
    assert unmarshal_item(marshal_item(record)) == record


def test_decode_record_rejects_low_level_items():
    with pytest.raises(TypeError):
        decode_record({"a": {"S": "x"}})
    assert unmarshal_item({"a": {"S": "x"}}) == {"a": "x"}
