"""AgentWave SDK type definitions.

This module exports all record types produced by the decoders.
"""

from agentwave.types.agents import AgentListing, AgentProfile
from agentwave.types.common import (
    MIST_PER_SUI,
    ZERO_ADDRESS,
    format_sui,
    mist_to_sui,
    ms_to_datetime,
    normalize_address,
)
from agentwave.types.escrows import STATUS_LABELS, EscrowInfo, EscrowStatus, status_label

__all__ = [
    # Agent types
    "AgentProfile",
    "AgentListing",
    # Escrow types
    "EscrowInfo",
    "EscrowStatus",
    "STATUS_LABELS",
    "status_label",
    # Helpers
    "ZERO_ADDRESS",
    "MIST_PER_SUI",
    "normalize_address",
    "mist_to_sui",
    "format_sui",
    "ms_to_datetime",
]
