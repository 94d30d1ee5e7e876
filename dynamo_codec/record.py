from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .decoder import DecodeResult, decode_report
from .encoder import encode
from .settings import NumberMode, resolve_number_mode
from .types import AttributeValue


def encode_record(record: Mapping[str, Any] | None) -> dict[str, AttributeValue]:
    # Fields that encode to the empty value are kept, not dropped.
    if not record:
        return {}
    return {name: encode(value) for name, value in record.items()}


def decode_record_report(
    item: Mapping[str, AttributeValue] | None,
    *,
    number_mode: NumberMode | str | None = None,
) -> DecodeResult:
    mode = resolve_number_mode(number_mode)
    record: dict[str, Any] = {}
    defects = []
    for name, tv in (item or {}).items():
        result = decode_report(tv, number_mode=mode, path=name)
        record[name] = result.value
        defects.extend(result.defects)
    return DecodeResult(value=record, defects=defects)


def decode_record(
    item: Mapping[str, AttributeValue] | None,
    *,
    number_mode: NumberMode | str | None = None,
) -> dict[str, Any]:
    """
    Decode every field; a missing item is an empty record.

    Values must be AttributeValue instances. Low-level client items
    (`{"a": {"S": "x"}}`) go through `unmarshal_item` instead.
    """
    return decode_record_report(item, number_mode=number_mode).value


def marshal_item(record: Mapping[str, Any] | None) -> dict[str, dict[str, Any]]:
    """Record -> `Item` in the shape `boto3.client("dynamodb")` expects."""
    return {name: tv.to_wire() for name, tv in encode_record(record).items()}


def unmarshal_item(
    item: Mapping[str, Any] | None,
    *,
    number_mode: NumberMode | str | None = None,
) -> dict[str, Any]:
    """Low-level client `Item` -> record. Malformed payloads raise WireFormatError."""
    if not item:
        return {}
    values = {name: AttributeValue.from_wire(raw, path=name) for name, raw in item.items()}
    return decode_record(values, number_mode=number_mode)
