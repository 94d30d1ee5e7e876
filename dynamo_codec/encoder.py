from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal
from enum import Enum, auto
from typing import Any

from boto3.dynamodb.types import Binary

from .observability.logging import get_logger
from .types import AttributeValue, plain_text

log = get_logger("dynamo_codec.encoder")

_NUMBER_TYPES = (int, float, Decimal)
_BYTES_TYPES = (bytes, bytearray, memoryview, Binary)
_SEQUENCE_TYPES = (list, tuple, set, frozenset)


class NativeKind(Enum):
    """Shape of a native value, resolved once before encoding."""

    TEXT = auto()
    NUMBER = auto()
    BYTES = auto()
    BOOLEAN = auto()
    TEXT_SEQUENCE = auto()
    BYTES_SEQUENCE = auto()
    NUMBER_SEQUENCE = auto()
    MAPPING = auto()
    SEQUENCE = auto()
    UNSUPPORTED = auto()


def _is_number(value: Any) -> bool:
    # bool is an int subclass but encodes as BOOL.
    return isinstance(value, _NUMBER_TYPES) and not isinstance(value, bool)


def _is_bytes(value: Any) -> bool:
    return isinstance(value, _BYTES_TYPES)


def _is_text(value: Any) -> bool:
    return isinstance(value, str)


def classify(value: Any) -> NativeKind:
    if isinstance(value, str):
        return NativeKind.TEXT
    if isinstance(value, bool):
        return NativeKind.BOOLEAN
    if _is_number(value):
        return NativeKind.NUMBER
    if _is_bytes(value):
        return NativeKind.BYTES
    if isinstance(value, _SEQUENCE_TYPES):
        if not value:
            return NativeKind.UNSUPPORTED
        if all(_is_text(v) for v in value):
            return NativeKind.TEXT_SEQUENCE
        if all(_is_bytes(v) for v in value):
            return NativeKind.BYTES_SEQUENCE
        if all(_is_number(v) for v in value):
            return NativeKind.NUMBER_SEQUENCE
        # Mixed sets have no stable order to carry into a list.
        if isinstance(value, (list, tuple)):
            return NativeKind.SEQUENCE
        return NativeKind.UNSUPPORTED
    if isinstance(value, Mapping):
        if all(isinstance(k, str) for k in value):
            return NativeKind.MAPPING
        return NativeKind.UNSUPPORTED
    return NativeKind.UNSUPPORTED


def number_text(value: int | float | Decimal) -> str | None:
    """
    Default decimal rendering of the base numeric type.

    None for NaN, infinities and ints past the interpreter's digit limit.
    Subclasses (int-mixin enums) render as their number, not their __str__.
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return float.__repr__(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        return Decimal.__str__(value)
    try:
        return int.__repr__(value)
    except ValueError:
        return None


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, Binary):
        return value.value
    return bytes(value)


def _encode_items(items: Iterable[Any], render: Callable[[Any], Any]) -> list[Any] | None:
    out = []
    for item in items:
        rendered = render(item)
        if rendered is None:
            return None
        out.append(rendered)
    return out


class _Encoding:
    """One encode call. Tracks containers on the current path to stop cycles."""

    __slots__ = ("_active",)

    def __init__(self) -> None:
        self._active: set[int] = set()

    def value(self, value: Any) -> AttributeValue:
        kind = classify(value)

        if kind is NativeKind.TEXT:
            return AttributeValue.string(value)

        if kind is NativeKind.NUMBER:
            text = number_text(value)
            if text is None:
                return self._unsupported(value)
            return AttributeValue.number(text)

        if kind is NativeKind.BYTES:
            return AttributeValue.binary(_to_bytes(value))

        if kind is NativeKind.BOOLEAN:
            return AttributeValue.boolean(value)

        if kind is NativeKind.TEXT_SEQUENCE:
            return AttributeValue.string_set(_encode_items(value, plain_text))

        if kind is NativeKind.BYTES_SEQUENCE:
            return AttributeValue.binary_set(_encode_items(value, _to_bytes))

        if kind is NativeKind.NUMBER_SEQUENCE:
            texts = _encode_items(value, number_text)
            if texts is None:
                return self._unsupported(value)
            return AttributeValue.number_set(texts)

        if kind in (NativeKind.MAPPING, NativeKind.SEQUENCE):
            if id(value) in self._active:
                return self._unsupported(value)
            self._active.add(id(value))
            try:
                if kind is NativeKind.MAPPING:
                    return AttributeValue.mapping({name: self.value(v) for name, v in value.items()})
                return AttributeValue.sequence(self.value(v) for v in value)
            finally:
                self._active.discard(id(value))

        return self._unsupported(value)

    def _unsupported(self, value: Any) -> AttributeValue:
        log.debug("unencodable_value", python_type=type(value).__name__)
        return AttributeValue.empty()


def encode(value: Any) -> AttributeValue:
    """
    Convert a native value into an AttributeValue.

    Never raises: shapes with no DynamoDB representation (None, empty or
    unordered mixed collections, non-string mapping keys, NaN, cycles, nesting
    deeper than the interpreter's recursion limit, arbitrary objects) come back
    as the empty value. Set elements keep their iteration order and are not
    de-duplicated.
    """
    try:
        return _Encoding().value(value)
    except RecursionError:
        log.debug("unencodable_value", python_type=type(value).__name__, reason="too_deep")
        return AttributeValue.empty()
