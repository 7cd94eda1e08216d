"""
Decode boundary for query responses.

These functions never raise a decode error: every ``DecodeError`` is logged on
the ``agentwave.decode`` logger and replaced by a benign result, so the
presentation layer always receives something it can render.
"""

from typing import Any

from agentwave.exceptions import DecodeError, ValidationError
from agentwave.logging import get_logger, log_decode_failure
from agentwave.schemas import AGENT_PROFILE, AGENT_PROFILE_WITH_OWNER, ESCROW_INFO
from agentwave.shapes import ReturnValue, resolve_list, resolve_struct
from agentwave.types.agents import AgentListing, AgentProfile
from agentwave.types.common import normalize_address
from agentwave.types.escrows import EscrowInfo

logger = get_logger("decode")


def decode_agent_profile(owner: str, return_values: list[ReturnValue]) -> AgentProfile:
    """
    Decode the response of a keyed profile lookup.

    Args:
        owner: Address the profile was looked up by
        return_values: Raw return values, packed or separated

    Returns:
        The decoded profile, or ``AgentProfile.placeholder(owner)`` on failure
    """
    try:
        return resolve_struct(AGENT_PROFILE, return_values, owner=owner)
    except DecodeError as e:
        log_decode_failure(f"AgentProfile {owner}", e, [v.data for v in return_values])
        return AgentProfile.placeholder(owner)


def decode_agent_profiles(return_values: list[ReturnValue]) -> list[AgentProfile]:
    """Decode a list-all profiles response; empty on failure."""
    try:
        return resolve_list(AGENT_PROFILE_WITH_OWNER, return_values)
    except DecodeError as e:
        log_decode_failure("AgentProfile list", e, [v.data for v in return_values])
        return []


def decode_escrows(return_values: list[ReturnValue]) -> list[EscrowInfo]:
    """Decode a vector<AgenticEscrowInfo> response; empty on failure."""
    try:
        return resolve_list(ESCROW_INFO, return_values)
    except DecodeError as e:
        log_decode_failure("EscrowInfo list", e, [v.data for v in return_values])
        return []


def _event_timestamp(raw: Any) -> int | None:
    # u64 fields arrive as decimal strings in parsedJson
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.isdigit():
        return int(raw)
    return None


def decode_profile_created_events(events: list[dict[str, Any]]) -> list[AgentListing]:
    """
    Build the agent directory from AgentProfileCreated events.

    Events are taken in the order given (newest first for a descending
    query); only the first event per owner is kept. Events without a valid
    owner are skipped. A missing name falls back to the shortened owner.
    """
    listings: list[AgentListing] = []
    seen: set[str] = set()

    for event in events:
        parsed = event.get("parsedJson") if isinstance(event, dict) else None
        if not isinstance(parsed, dict) or not parsed.get("owner"):
            continue
        try:
            owner = normalize_address(str(parsed["owner"]))
        except ValidationError:
            logger.warning("Skipping AgentProfileCreated event with owner %r", parsed["owner"])
            continue
        if owner in seen:
            continue
        seen.add(owner)

        name = parsed.get("name")
        listings.append(
            AgentListing(
                owner=owner,
                name=name if isinstance(name, str) and name else owner[:10] + "...",
                timestamp=_event_timestamp(parsed.get("timestamp")),
            )
        )

    return listings
