"""
Binary Canonical Serialization (BCS) reader.

BCS is tag-free: a value carries no field names or type markers, so the only
way to recover meaning is to read fields in their declared order with the
matching decoder. This module provides the cursor-based reader, the primitive
and composite decoders, and the ``BcsType`` descriptors the struct schemas are
built from.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from agentwave.exceptions import BufferUnderrun, MalformedVarint, Utf8DecodeError

# A u64 needs at most 10 ULEB128 bytes
MAX_ULEB128_BYTES = 10

ADDRESS_LENGTH = 32


def read_uleb128(data: bytes, offset: int = 0) -> tuple[int, int]:
    """
    Decode an unsigned LEB128 integer starting at ``offset``.

    Each byte contributes its low 7 bits; the high bit flags continuation.

    Args:
        data: Buffer to read from
        offset: Cursor position of the first varint byte

    Returns:
        Tuple of (decoded value, offset just past the varint)

    Raises:
        BufferUnderrun: If the buffer ends before a terminating byte
        MalformedVarint: If no terminating byte appears within MAX_ULEB128_BYTES
    """
    value = 0
    shift = 0
    for consumed in range(MAX_ULEB128_BYTES):
        position = offset + consumed
        if position >= len(data):
            raise BufferUnderrun(1, 0, position)
        byte = data[position]
        value |= (byte & 0x7F) << shift
        if byte & 0x80 == 0:
            return value, position + 1
        shift += 7
    raise MalformedVarint(MAX_ULEB128_BYTES, offset)


class BcsReader:
    """
    Forward-only cursor over an immutable byte buffer.

    Every ``read_*`` method either consumes exactly the bytes of one value and
    advances ``offset``, or raises a ``DecodeError`` subclass. A reader is
    owned by a single decode call and is never shared.
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self.offset = 0

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._data) - self.offset

    def read_uleb128(self) -> int:
        value, self.offset = read_uleb128(self._data, self.offset)
        return value

    def read_bytes(self, length: int) -> bytes:
        """Read exactly ``length`` raw bytes."""
        if length > self.remaining:
            raise BufferUnderrun(length, self.remaining, self.offset)
        start = self.offset
        self.offset += length
        return self._data[start:self.offset]

    def read_u8(self) -> int:
        return self.read_bytes(1)[0]

    def read_u64(self) -> int:
        """Read 8 little-endian bytes into an exact Python int."""
        return int.from_bytes(self.read_bytes(8), "little")

    def read_bool(self) -> bool:
        # Any nonzero byte is true
        return self.read_u8() != 0

    def read_address(self) -> str:
        """Read a 32-byte address and render it as lowercase 0x-prefixed hex."""
        return "0x" + self.read_bytes(ADDRESS_LENGTH).hex()

    def read_string(self) -> str:
        """Read a ULEB128 length followed by that many UTF-8 bytes."""
        length = self.read_uleb128()
        start = self.offset
        raw = self.read_bytes(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise Utf8DecodeError(e.reason, start + e.start) from e

    def read_vector(self, element: "BcsType") -> list[Any]:
        """
        Read a ULEB128 count followed by that many elements.

        The first failing element aborts the whole vector.
        """
        count = self.read_uleb128()
        return [element.read(self) for _ in range(count)]

    def read_option(self, inner: "BcsType") -> Any:
        """Read a presence byte; 0 means absent (None), nonzero means ``inner`` follows."""
        if self.read_u8() == 0:
            return None
        return inner.read(self)


@dataclass(frozen=True)
class BcsType:
    """
    Descriptor for one decodable BCS type.

    Attributes:
        name: Short display name used in schemas and log messages
        move_type: Move type tag the query engine reports for this type
        read: Function consuming one value from a BcsReader
    """

    name: str
    move_type: str
    read: Callable[[BcsReader], Any]

    def decode(self, data: bytes) -> Any:
        """Decode one value from a self-contained buffer starting at offset 0."""
        return self.read(BcsReader(data))

    def matches_type_tag(self, type_tag: str) -> bool:
        """Check whether a reported Move type tag denotes this type."""
        return normalize_type_tag(type_tag) == normalize_type_tag(self.move_type)


STRING = BcsType("string", "0x1::string::String", BcsReader.read_string)
ADDRESS = BcsType("address", "address", BcsReader.read_address)
U8 = BcsType("u8", "u8", BcsReader.read_u8)
U64 = BcsType("u64", "u64", BcsReader.read_u64)
BOOL = BcsType("bool", "bool", BcsReader.read_bool)


def vector(element: BcsType) -> BcsType:
    """Build a vector<T> decoder from an element decoder."""
    return BcsType(
        f"vector<{element.name}>",
        f"vector<{element.move_type}>",
        lambda reader: reader.read_vector(element),
    )


def option(inner: BcsType) -> BcsType:
    """Build an option<T> decoder from an inner decoder."""
    return BcsType(
        f"option<{inner.name}>",
        f"0x1::option::Option<{inner.move_type}>",
        lambda reader: reader.read_option(inner),
    )


# Addresses inside type tags appear either short ("0x1") or padded to 64 hex
# digits, with or without the 0x prefix
_TAG_ADDRESS_PATTERN = re.compile(r"(?:0x([0-9a-fA-F]+)|\b([0-9a-fA-F]{64}))::")


def normalize_type_tag(type_tag: str) -> str:
    """
    Canonicalize a Move type tag for comparison.

    Strips whitespace and rewrites every address component to its shortest
    lowercase 0x form, so "0x0000...0001::string::String" and
    "0x1::string::String" compare equal.
    """

    def shorten(match: re.Match[str]) -> str:
        digits = (match.group(1) or match.group(2)).lstrip("0").lower()
        return f"0x{digits or '0'}::"

    return _TAG_ADDRESS_PATTERN.sub(shorten, "".join(type_tag.split()))
