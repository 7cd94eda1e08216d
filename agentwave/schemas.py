"""
Declarative struct schemas for the AgentWave Move structs.

Each schema is an ordered field table. Decoding walks the table with one
shared cursor and only builds the record once every field has been read, so a
failure anywhere yields an exception and never a partially populated record.
"""

from dataclasses import dataclass
from typing import Any

from agentwave.bcs import ADDRESS, BOOL, STRING, U8, U64, BcsReader, BcsType, option, vector
from agentwave.types.agents import AgentProfile
from agentwave.types.escrows import EscrowInfo


@dataclass(frozen=True)
class Field:
    """One named, typed position in a struct schema."""

    name: str
    type: BcsType


class StructSchema:
    """
    Ordered field table for one record type.

    Field names match the record's dataclass attributes. Fields the wire
    format does not carry (e.g. the owner of a keyed profile lookup) are passed
    to ``build`` as extras.
    """

    def __init__(self, name: str, record_type: type, fields: list[Field]) -> None:
        self.name = name
        self.record_type = record_type
        self.fields = tuple(fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __repr__(self) -> str:
        return f"StructSchema({self.name!r}, {len(self.fields)} fields)"

    def build(self, values: dict[str, Any], **extra: Any) -> Any:
        """Construct the record from decoded field values plus extras."""
        return self.record_type(**extra, **values)

    def read(self, reader: BcsReader, **extra: Any) -> Any:
        """Decode one record at the reader's cursor, in field order."""
        values = {field.name: field.type.read(reader) for field in self.fields}
        return self.build(values, **extra)

    def decode(self, data: bytes, **extra: Any) -> Any:
        """Decode one packed record from the start of ``data``."""
        return self.read(BcsReader(data), **extra)

    def read_list(self, reader: BcsReader) -> list[Any]:
        """Decode a ULEB128 count followed by that many back-to-back records."""
        count = reader.read_uleb128()
        return [self.read(reader) for _ in range(count)]

    def decode_list(self, data: bytes) -> list[Any]:
        """
        Decode a vector of records from the start of ``data``.

        Records come back in wire order. The first failing record aborts the
        whole list.
        """
        return self.read_list(BcsReader(data))


_PROFILE_FIELDS = [
    Field("avatar", STRING),
    Field("name", STRING),
    Field("capabilities", vector(STRING)),
    Field("description", STRING),
    Field("rating", U64),
    Field("total_reviews", U64),
    Field("completed_tasks", U64),
    Field("created_at", U64),
    Field("model_type", STRING),
    Field("is_active", BOOL),
]

# Return tuple of agentwave_profile::get_agent_profile; the owner is the lookup key
AGENT_PROFILE = StructSchema("AgentProfile", AgentProfile, _PROFILE_FIELDS)

# Element of agentwave_profile::get_all_agent_profiles
AGENT_PROFILE_WITH_OWNER = StructSchema(
    "AgentProfileWithOwner",
    AgentProfile,
    [Field("owner", ADDRESS), *_PROFILE_FIELDS],
)

# agentwave_contract::AgenticEscrowInfo
ESCROW_INFO = StructSchema(
    "AgenticEscrowInfo",
    EscrowInfo,
    [
        Field("escrow_id", ADDRESS),
        Field("job_title", STRING),
        Field("client", ADDRESS),
        Field("custodian", ADDRESS),
        Field("job_description", STRING),
        Field("job_category", STRING),
        Field("duration", U8),
        Field("budget", U64),
        Field("current_balance", U64),
        Field("status", U8),
        Field("main_agent", ADDRESS),
        Field("main_agent_price", U64),
        Field("main_agent_paid", BOOL),
        Field("total_hired_agents", U64),
        Field("blob_id", option(STRING)),
        Field("created_at", U64),
    ],
)
