from __future__ import annotations

import base64
import binascii
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import WireFormatError


class AttributeType(str, Enum):
    STRING = "S"
    STRING_SET = "SS"
    NUMBER = "N"
    NUMBER_SET = "NS"
    BINARY = "B"
    BINARY_SET = "BS"
    BOOLEAN = "BOOL"
    NULL = "NULL"
    LIST = "L"
    MAP = "M"


# Wire keys are inspected in decode priority order.
WIRE_PRIORITY = (
    AttributeType.NUMBER,
    AttributeType.STRING,
    AttributeType.BOOLEAN,
    AttributeType.BINARY,
    AttributeType.MAP,
    AttributeType.NUMBER_SET,
    AttributeType.STRING_SET,
    AttributeType.BINARY_SET,
    AttributeType.LIST,
)

SET_TYPES = frozenset({AttributeType.STRING_SET, AttributeType.NUMBER_SET, AttributeType.BINARY_SET})

# Variants whose empty payload counts as "not present" when reading the wire.
SIZED_TYPES = SET_TYPES | {AttributeType.BINARY, AttributeType.MAP, AttributeType.LIST}


def join_path(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def plain_text(value: Any) -> str:
    # str subclasses (str-mixin enums) keep their value, not their __str__.
    if isinstance(value, str):
        return str.__str__(value)
    return str(value)


def _all(items: Any, types: type | tuple[type, ...]) -> bool:
    return isinstance(items, tuple) and all(isinstance(i, types) for i in items)


def _payload_ok(kind: AttributeType | None, value: Any) -> bool:
    if kind is None:
        return value is None
    if kind in (AttributeType.STRING, AttributeType.NUMBER):
        return isinstance(value, str)
    if kind is AttributeType.BINARY:
        return isinstance(value, bytes)
    if kind is AttributeType.BOOLEAN:
        return isinstance(value, bool)
    if kind in (AttributeType.STRING_SET, AttributeType.NUMBER_SET):
        return _all(value, str)
    if kind is AttributeType.BINARY_SET:
        return _all(value, bytes)
    if kind is AttributeType.MAP:
        return isinstance(value, dict) and all(
            isinstance(k, str) and isinstance(v, AttributeValue) for k, v in value.items()
        )
    if kind is AttributeType.LIST:
        return _all(value, AttributeValue)
    # NULL is only ever read from the wire, as the empty value.
    return False


@dataclass(frozen=True, slots=True)
class AttributeValue:
    """A single DynamoDB attribute value: exactly one variant, or empty.

    Build instances with the named constructors; `kind` is None only for the
    empty/unset value the encoder returns for shapes it cannot represent.
    Payloads are immutable: sets and lists are tuples, binary is `bytes`.
    """

    kind: AttributeType | None = None
    value: Any = None

    def __post_init__(self) -> None:
        if not _payload_ok(self.kind, self.value):
            kind = self.kind.value if self.kind is not None else "empty"
            raise TypeError(f"Invalid {kind} payload of type {type(self.value).__name__}")

    # --- constructors ---

    @classmethod
    def empty(cls) -> AttributeValue:
        return cls()

    @classmethod
    def string(cls, text: str) -> AttributeValue:
        return cls(AttributeType.STRING, plain_text(text))

    @classmethod
    def number(cls, text: str) -> AttributeValue:
        return cls(AttributeType.NUMBER, plain_text(text))

    @classmethod
    def binary(cls, data: bytes | bytearray | memoryview) -> AttributeValue:
        return cls(AttributeType.BINARY, bytes(data))

    @classmethod
    def boolean(cls, flag: bool) -> AttributeValue:
        return cls(AttributeType.BOOLEAN, bool(flag))

    @classmethod
    def string_set(cls, items: Iterable[str]) -> AttributeValue:
        return cls(AttributeType.STRING_SET, tuple(plain_text(i) for i in items))

    @classmethod
    def number_set(cls, items: Iterable[str]) -> AttributeValue:
        return cls(AttributeType.NUMBER_SET, tuple(plain_text(i) for i in items))

    @classmethod
    def binary_set(cls, items: Iterable[bytes]) -> AttributeValue:
        return cls(AttributeType.BINARY_SET, tuple(bytes(i) for i in items))

    @classmethod
    def mapping(cls, entries: Mapping[str, AttributeValue]) -> AttributeValue:
        return cls(AttributeType.MAP, {plain_text(k): v for k, v in entries.items()})

    @classmethod
    def sequence(cls, items: Iterable[AttributeValue]) -> AttributeValue:
        return cls(AttributeType.LIST, tuple(items))

    @property
    def is_empty(self) -> bool:
        return self.kind is None

    # --- wire form (boto3 low-level client shape) ---

    def to_wire(self) -> dict[str, Any]:
        kind = self.kind
        if kind is None:
            return {}
        if kind is AttributeType.MAP:
            return {kind.value: {name: v.to_wire() for name, v in self.value.items()}}
        if kind is AttributeType.LIST:
            return {kind.value: [v.to_wire() for v in self.value]}
        if kind in SET_TYPES:
            return {kind.value: list(self.value)}
        return {kind.value: self.value}

    @classmethod
    def from_wire(cls, raw: Any, *, path: str = "") -> AttributeValue:
        """
        Read a low-level `{"S": ...}` style dict.

        Multiple populated keys are tolerated: the first one in decode priority
        order wins, skipping empty binary/map/set/list payloads when a later key
        is populated. `NULL`, unknown keys and non-dict input read as empty.
        """
        if not isinstance(raw, Mapping):
            return cls.empty()

        fallback: AttributeValue | None = None
        for kind in WIRE_PRIORITY:
            payload = raw.get(kind.value)
            if payload is None:
                continue
            out = _read_payload(kind, payload, path)
            if kind in SIZED_TYPES and not out.value:
                if fallback is None:
                    fallback = out
                continue
            return out
        return fallback if fallback is not None else cls.empty()


def _malformed(kind: AttributeType, path: str, payload: Any) -> WireFormatError:
    return WireFormatError(
        message=f"Malformed {kind.value} payload of type {type(payload).__name__}",
        path=path,
    )


def _read_bytes(kind: AttributeType, payload: Any, path: str) -> bytes:
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return bytes(payload)
    if isinstance(payload, str):
        # DynamoDB JSON (streams, exports) carries binary as base64 text.
        try:
            return base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise WireFormatError(
                message=f"Invalid base64 in {kind.value} payload", path=path, cause=e
            ) from e
    raise _malformed(kind, path, payload)


def _read_texts(kind: AttributeType, payload: Any, path: str) -> list[str]:
    if not isinstance(payload, (list, tuple)) or not all(isinstance(i, str) for i in payload):
        raise _malformed(kind, path, payload)
    return list(payload)


def _read_payload(kind: AttributeType, payload: Any, path: str) -> AttributeValue:
    if kind in (AttributeType.STRING, AttributeType.NUMBER):
        if not isinstance(payload, str):
            raise _malformed(kind, path, payload)
        return AttributeValue(kind, plain_text(payload))

    if kind is AttributeType.BOOLEAN:
        if not isinstance(payload, bool):
            raise _malformed(kind, path, payload)
        return AttributeValue.boolean(payload)

    if kind is AttributeType.BINARY:
        return AttributeValue.binary(_read_bytes(kind, payload, path))

    if kind is AttributeType.STRING_SET:
        return AttributeValue.string_set(_read_texts(kind, payload, path))

    if kind is AttributeType.NUMBER_SET:
        return AttributeValue.number_set(_read_texts(kind, payload, path))

    if kind is AttributeType.BINARY_SET:
        if not isinstance(payload, (list, tuple)):
            raise _malformed(kind, path, payload)
        return AttributeValue.binary_set(
            _read_bytes(kind, item, f"{path}[{i}]") for i, item in enumerate(payload)
        )

    if kind is AttributeType.MAP:
        if not isinstance(payload, Mapping) or not all(isinstance(k, str) for k in payload):
            raise _malformed(kind, path, payload)
        return AttributeValue.mapping(
            {name: AttributeValue.from_wire(v, path=join_path(path, name)) for name, v in payload.items()}
        )

    if kind is AttributeType.LIST:
        if not isinstance(payload, (list, tuple)):
            raise _malformed(kind, path, payload)
        return AttributeValue.sequence(
            AttributeValue.from_wire(v, path=f"{path}[{i}]") for i, v in enumerate(payload)
        )

    raise _malformed(kind, path, payload)
