"""Key schema, attribute definition and throughput descriptors.

Plain dicts in the boto3 low-level client shape, ready to pass to a
table-management layer (`KeySchema=`, `AttributeDefinitions=`,
`ProvisionedThroughput=`).
"""

from __future__ import annotations

from typing import TypedDict

from .errors import SchemaError

KEY_TYPE_HASH = "HASH"
KEY_TYPE_RANGE = "RANGE"

ATTRIBUTE_TYPES = frozenset({"S", "N", "B", "BOOL", "L", "M", "SS", "NS", "BS"})


class KeySchemaElement(TypedDict):
    AttributeName: str
    KeyType: str


class AttributeDefinition(TypedDict, total=False):
    AttributeName: str
    AttributeType: str


class ProvisionedThroughput(TypedDict):
    ReadCapacityUnits: int
    WriteCapacityUnits: int


def new_provisioned_throughput(read: int, write: int) -> ProvisionedThroughput:
    if int(read) < 0 or int(write) < 0:
        raise SchemaError(message="Capacity units must not be negative")
    return {"ReadCapacityUnits": int(read), "WriteCapacityUnits": int(write)}


# --- key schema ---


def new_key_schema(*elements: KeySchemaElement) -> list[KeySchemaElement]:
    """Hash element, optionally followed by a range element; extras are ignored."""
    if not elements:
        raise SchemaError(message="Key schema needs at least one element")
    return list(elements[:2])


def new_key_element(name: str, key_type: str) -> KeySchemaElement:
    return {"AttributeName": name, "KeyType": key_type}


def new_hash_key_element(name: str) -> KeySchemaElement:
    return new_key_element(name, KEY_TYPE_HASH)


def new_range_key_element(name: str) -> KeySchemaElement:
    return new_key_element(name, KEY_TYPE_RANGE)


# --- attribute definitions ---


def new_attribute_definitions(*definitions: AttributeDefinition) -> list[AttributeDefinition]:
    return list(definitions)


def new_attribute_definition(name: str, attr_type: str) -> AttributeDefinition:
    # Unknown types give an empty descriptor rather than an error.
    if attr_type not in ATTRIBUTE_TYPES:
        return {}
    return {"AttributeName": name, "AttributeType": attr_type}


def new_string_attribute(name: str) -> AttributeDefinition:
    return new_attribute_definition(name, "S")


def new_number_attribute(name: str) -> AttributeDefinition:
    return new_attribute_definition(name, "N")


def new_byte_attribute(name: str) -> AttributeDefinition:
    return new_attribute_definition(name, "B")


def new_bool_attribute(name: str) -> AttributeDefinition:
    return new_attribute_definition(name, "BOOL")
