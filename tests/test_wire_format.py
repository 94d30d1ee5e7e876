from __future__ import annotations

import base64
from decimal import Decimal

import pytest
from boto3.dynamodb.types import Binary, TypeDeserializer

from dynamo_codec import AttributeType, AttributeValue, WireFormatError, encode


def test_to_wire_for_every_variant():
    assert AttributeValue.string("s").to_wire() == {"S": "s"}
    assert AttributeValue.number("1").to_wire() == {"N": "1"}
    assert AttributeValue.binary(b"b").to_wire() == {"B": b"b"}
    assert AttributeValue.boolean(False).to_wire() == {"BOOL": False}
    assert AttributeValue.string_set(["a"]).to_wire() == {"SS": ["a"]}
    assert AttributeValue.number_set(["1"]).to_wire() == {"NS": ["1"]}
    assert AttributeValue.binary_set([b"x"]).to_wire() == {"BS": [b"x"]}
    assert AttributeValue.mapping({"k": AttributeValue.string("v")}).to_wire() == {"M": {"k": {"S": "v"}}}
    assert AttributeValue.sequence([AttributeValue.number("2")]).to_wire() == {"L": [{"N": "2"}]}
    assert AttributeValue.empty().to_wire() == {}


def test_boto3_deserializer_agrees_with_our_wire_shape():
    deserializer = TypeDeserializer()
    wire = encode({"n": 5, "s": "x", "ss": ["a", "b"], "ns": [1, 2], "bin": b"q", "l": ["a", 1]}).to_wire()
    out = deserializer.deserialize(wire)
    assert out["n"] == Decimal(5)
    assert out["s"] == "x"
    assert out["ss"] == {"a", "b"}
    assert out["ns"] == {Decimal(1), Decimal(2)}
    assert out["bin"] == Binary(b"q")
    assert out["l"] == ["a", Decimal(1)]


def test_from_wire_round_trips_to_wire():
    tv = encode({"a": [1, 2], "b": {"c": [b"x", b"y"]}, "d": ["m", False]})
    assert AttributeValue.from_wire(tv.to_wire()) == tv


def test_from_wire_uses_decode_priority_for_multiple_keys():
    assert AttributeValue.from_wire({"S": "text", "N": "1"}) == AttributeValue.number("1")
    assert AttributeValue.from_wire({"BOOL": True, "S": "t"}) == AttributeValue.string("t")


def test_from_wire_skips_empty_sized_payload_when_another_key_is_set():
    out = AttributeValue.from_wire({"B": b"", "L": [{"S": "x"}]})
    assert out.kind is AttributeType.LIST
    only_empty = AttributeValue.from_wire({"M": {}})
    assert only_empty == AttributeValue.mapping({})


def test_from_wire_treats_null_unknown_and_non_dict_as_empty():
    assert AttributeValue.from_wire({"NULL": True}).is_empty
    assert AttributeValue.from_wire({"X": 1}).is_empty
    assert AttributeValue.from_wire("S").is_empty
    assert AttributeValue.from_wire(None).is_empty
    assert AttributeValue.from_wire({"S": None}).is_empty


def test_from_wire_decodes_base64_binary_text():
    raw = {"B": base64.b64encode(b"\x00\xff").decode(), "BS": []}
    assert AttributeValue.from_wire(raw) == AttributeValue.binary(b"\x00\xff")
    bs = AttributeValue.from_wire({"BS": [base64.b64encode(b"a").decode(), b"b"]})
    assert bs == AttributeValue.binary_set([b"a", b"b"])


def test_from_wire_rejects_malformed_payloads_with_path():
    with pytest.raises(WireFormatError) as exc:
        AttributeValue.from_wire({"M": {"age": {"N": 30}}}, path="user")
    assert exc.value.path == "user.age"
    assert "user.age" in str(exc.value)

    with pytest.raises(WireFormatError):
        AttributeValue.from_wire({"B": "not base64!"})
    with pytest.raises(WireFormatError):
        AttributeValue.from_wire({"SS": "abc"})
    with pytest.raises(WireFormatError):
        AttributeValue.from_wire({"BOOL": "true"})
    with pytest.raises(WireFormatError):
        AttributeValue.from_wire({"L": [{"BS": [1]}]})


def test_attribute_values_are_immutable():
    tv = AttributeValue.string("x")
    with pytest.raises(AttributeError):
        tv.value = "y"  # type: ignore[misc]
