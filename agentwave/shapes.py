"""
Wire-shape resolution for simulated-call responses.

A Move function returning several values reaches us in one of two shapes:

- packed tuple: a single blob holding every field back to back
- separated fields: one blob per field, each starting at offset 0

The shape is inferred from the blob count. When the query engine reports a
type tag with a blob, the tag is checked against the declared field type so a
count collision can't silently select the wrong decoder.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from agentwave.exceptions import UnexpectedShape
from agentwave.schemas import StructSchema


@dataclass(frozen=True)
class ReturnValue:
    """One raw return value of a simulated call."""

    data: bytes
    type_tag: str | None = None


class Shape(Enum):
    PACKED = "packed"
    SEPARATED = "separated"


def detect_shape(schema: StructSchema, return_values: list[ReturnValue]) -> Shape:
    """
    Pick the decode strategy from the number of returned blobs.

    Raises:
        UnexpectedShape: If the count matches neither 1 nor the schema's field count
    """
    count = len(return_values)
    if count == 1:
        return Shape.PACKED
    if count == len(schema):
        return Shape.SEPARATED
    raise UnexpectedShape(
        f"{schema.name}: expected 1 or {len(schema)} return values, got {count}",
        count,
    )


def check_type_tags(schema: StructSchema, return_values: list[ReturnValue]) -> None:
    """Reject separated-field responses whose reported tags contradict the schema."""
    for position, (field, value) in enumerate(zip(schema.fields, return_values)):
        if value.type_tag is None:
            continue
        if not field.type.matches_type_tag(value.type_tag):
            raise UnexpectedShape(
                f"{schema.name}: return value {position} ({field.name}) has type "
                f"{value.type_tag}, expected {field.type.move_type}",
                len(return_values),
            )


def resolve_struct(
    schema: StructSchema, return_values: list[ReturnValue], **extra: Any
) -> Any:
    """
    Decode one record from a simulated-call response of either shape.

    Args:
        schema: Field table of the expected record
        return_values: Raw return values in call order
        **extra: Record fields not carried on the wire

    Returns:
        The fully populated record

    Raises:
        DecodeError: On any shape or field decode failure
    """
    shape = detect_shape(schema, return_values)
    if shape is Shape.PACKED:
        return schema.decode(return_values[0].data, **extra)

    check_type_tags(schema, return_values)
    values = {
        field.name: field.type.decode(value.data)
        for field, value in zip(schema.fields, return_values)
    }
    return schema.build(values, **extra)


def resolve_list(schema: StructSchema, return_values: list[ReturnValue]) -> list[Any]:
    """
    Decode a list-all response: exactly one blob holding vector<schema>.

    Raises:
        UnexpectedShape: If the response isn't a single vector blob
        DecodeError: On any element decode failure
    """
    if len(return_values) != 1:
        raise UnexpectedShape(
            f"vector<{schema.name}>: expected 1 return value, got {len(return_values)}",
            len(return_values),
        )
    value = return_values[0]
    if value.type_tag is not None and not value.type_tag.strip().startswith("vector<"):
        raise UnexpectedShape(
            f"vector<{schema.name}>: return value has type {value.type_tag}",
            1,
        )
    return schema.decode_list(value.data)
