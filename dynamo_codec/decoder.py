from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal, DecimalException
from typing import Any

from boto3.dynamodb.types import DYNAMODB_CONTEXT

from .errors import NumberDecodeError
from .observability.logging import get_logger
from .settings import NumberMode, get_settings, resolve_number_mode
from .types import AttributeType, AttributeValue, join_path

log = get_logger("dynamo_codec.decoder")

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(slots=True)
class DecodeResult:
    value: Any
    defects: list[NumberDecodeError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.defects


def parse_number(text: str, mode: NumberMode, *, path: str = "") -> int | float | Decimal:
    if _INTEGER_RE.fullmatch(text):
        try:
            return int(text)
        except ValueError as e:
            # Digit count beyond the interpreter's int conversion limit.
            raise NumberDecodeError(message="Number is too long", path=path, cause=e, text=text) from e

    if mode is NumberMode.INTEGER:
        raise NumberDecodeError(message="Number is not an integer", path=path, text=text)

    try:
        if mode is NumberMode.DECIMAL:
            d = DYNAMODB_CONTEXT.create_decimal(text)
        else:
            d = Decimal(text)
    except DecimalException as e:
        raise NumberDecodeError(message="Number is not numeric", path=path, cause=e, text=text) from e

    if not d.is_finite():
        raise NumberDecodeError(message="Number is not finite", path=path, text=text)
    if d == d.to_integral_value():
        return int(d)
    if mode is NumberMode.DECIMAL:
        return d
    return float(d)


class _Decoding:
    """One decode call: number mode plus the defects collected so far."""

    __slots__ = ("mode", "defects", "redact")

    def __init__(self, mode: NumberMode, *, redact: bool = False) -> None:
        self.mode = mode
        self.defects: list[NumberDecodeError] = []
        self.redact = redact

    def value(self, tv: AttributeValue | None, path: str) -> Any:
        try:
            return self._dispatch(tv, path)
        except NumberDecodeError as e:
            self.defects.append(e)
            # Stored values stay out of production logs.
            text = None if self.redact else e.text
            log.warning("decode_defect", path=e.path, text=text, reason=e.message)
            return None

    def _dispatch(self, tv: AttributeValue | None, path: str) -> Any:
        if tv is None or tv.kind is None:
            return None
        kind, payload = tv.kind, tv.value

        if kind is AttributeType.NUMBER:
            return parse_number(payload, self.mode, path=path)

        if kind is AttributeType.STRING:
            return payload

        if kind is AttributeType.BOOLEAN:
            return payload

        # Empty binary, map, set and list payloads read as absent.
        if not payload:
            return None

        if kind is AttributeType.BINARY:
            return bytes(payload)

        if kind is AttributeType.MAP:
            return {name: self.value(v, join_path(path, name)) for name, v in payload.items()}

        if kind is AttributeType.NUMBER_SET:
            return self._number_set(payload, path)

        if kind in (AttributeType.STRING_SET, AttributeType.BINARY_SET):
            return list(payload)

        if kind is AttributeType.LIST:
            return [self.value(v, f"{path}[{i}]") for i, v in enumerate(payload)]

        return None

    def _number_set(self, texts: tuple[str, ...], path: str) -> list[Any]:
        out = []
        for i, text in enumerate(texts):
            try:
                out.append(parse_number(text, self.mode, path=f"{path}[{i}]"))
            except NumberDecodeError as e:
                log.debug("number_set_element_dropped", path=e.path, text=text)
        return out


def decode_report(
    tv: AttributeValue | None,
    *,
    number_mode: NumberMode | str | None = None,
    path: str = "",
) -> DecodeResult:
    """Decode `tv` and return the value together with any field-level defects."""
    if tv is not None and not isinstance(tv, AttributeValue):
        raise TypeError(
            f"Expected AttributeValue, got {type(tv).__name__}; read low-level "
            "client items with AttributeValue.from_wire or unmarshal_item"
        )
    run = _Decoding(resolve_number_mode(number_mode), redact=get_settings().is_production)
    try:
        value = run.value(tv, path)
    except RecursionError:
        log.warning("decode_too_deep", path=path)
        value = None
    return DecodeResult(value=value, defects=run.defects)


def decode(tv: AttributeValue | None, *, number_mode: NumberMode | str | None = None) -> Any:
    """
    Convert an AttributeValue back into a native value.

    Never raises for AttributeValue or None input. Empty values, empty
    binary/map/set/list payloads, None and trees nested past the recursion
    limit decode to None. A Number that cannot be read under the active number
    mode makes its own slot None; the defect is logged (see `decode_report`).
    """
    return decode_report(tv, number_mode=number_mode).value
