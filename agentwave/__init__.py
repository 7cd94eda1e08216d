"""AgentWave SDK - decode AgentWave marketplace records from Sui read-only calls."""

from agentwave.async_client import AsyncAgentWaveClient
from agentwave.client import AgentWaveClient
from agentwave.config import TESTNET, NetworkConfig
from agentwave.decoding import (
    decode_agent_profile,
    decode_agent_profiles,
    decode_escrows,
    decode_profile_created_events,
)
from agentwave.exceptions import (
    AgentWaveError,
    BufferUnderrun,
    ConfigurationError,
    DecodeError,
    InspectError,
    MalformedReturnValue,
    MalformedVarint,
    RateLimitedError,
    RpcError,
    ServerError,
    UnexpectedShape,
    Utf8DecodeError,
    ValidationError,
)
from agentwave.logging import configure_logging, get_logger
from agentwave.schemas import AGENT_PROFILE, AGENT_PROFILE_WITH_OWNER, ESCROW_INFO, StructSchema
from agentwave.shapes import ReturnValue, Shape, resolve_list, resolve_struct
from agentwave.transport import HTTPTransport, RetryConfig
from agentwave.types import AgentListing, AgentProfile, EscrowInfo, EscrowStatus

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main Clients
    "AgentWaveClient",
    "AsyncAgentWaveClient",
    # Configuration
    "NetworkConfig",
    "TESTNET",
    # Records
    "AgentProfile",
    "AgentListing",
    "EscrowInfo",
    "EscrowStatus",
    # Decoding
    "decode_agent_profile",
    "decode_agent_profiles",
    "decode_escrows",
    "decode_profile_created_events",
    "resolve_struct",
    "resolve_list",
    "ReturnValue",
    "Shape",
    "StructSchema",
    "AGENT_PROFILE",
    "AGENT_PROFILE_WITH_OWNER",
    "ESCROW_INFO",
    # Exceptions
    "AgentWaveError",
    "ConfigurationError",
    "ValidationError",
    "DecodeError",
    "BufferUnderrun",
    "MalformedVarint",
    "MalformedReturnValue",
    "UnexpectedShape",
    "Utf8DecodeError",
    "RpcError",
    "InspectError",
    "RateLimitedError",
    "ServerError",
    # Transport
    "HTTPTransport",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
