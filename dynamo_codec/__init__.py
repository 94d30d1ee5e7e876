"""DynamoDB attribute value codec.

This package centralizes:
- the AttributeValue model (one populated variant per value)
- encoding native Python values into attribute values
- decoding attribute values back, with field-level defect reporting
- whole-record conversion and the boto3 low-level client wire shape
- key schema / attribute definition / throughput descriptor builders

"""

from .decoder import DecodeResult, decode, decode_report
from .encoder import encode
from .errors import CodecError, NumberDecodeError, SchemaError, WireFormatError
from .record import decode_record, decode_record_report, encode_record, marshal_item, unmarshal_item
from .schema import (
    KEY_TYPE_HASH,
    KEY_TYPE_RANGE,
    new_attribute_definition,
    new_attribute_definitions,
    new_bool_attribute,
    new_byte_attribute,
    new_hash_key_element,
    new_key_element,
    new_key_schema,
    new_number_attribute,
    new_provisioned_throughput,
    new_range_key_element,
    new_string_attribute,
)
from .settings import NumberMode
from .types import AttributeType, AttributeValue

__all__ = [
    "AttributeType",
    "AttributeValue",
    "CodecError",
    "DecodeResult",
    "KEY_TYPE_HASH",
    "KEY_TYPE_RANGE",
    "NumberDecodeError",
    "NumberMode",
    "SchemaError",
    "WireFormatError",
    "decode",
    "decode_record",
    "decode_record_report",
    "decode_report",
    "encode",
    "encode_record",
    "marshal_item",
    "new_attribute_definition",
    "new_attribute_definitions",
    "new_bool_attribute",
    "new_byte_attribute",
    "new_hash_key_element",
    "new_key_element",
    "new_key_schema",
    "new_number_attribute",
    "new_provisioned_throughput",
    "new_range_key_element",
    "new_string_attribute",
    "unmarshal_item",
]
