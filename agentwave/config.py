"""
Network configuration for the AgentWave SDK.

Holds the RPC endpoint, the published AgentWave package and the Walrus
aggregator that serves escrow deliverables. Defaults point at the current
testnet deployment.
"""

import os
from dataclasses import dataclass, replace

from agentwave.exceptions import ConfigurationError, ValidationError
from agentwave.types.common import normalize_address

PROFILE_MODULE = "agentwave_profile"
CONTRACT_MODULE = "agentwave_contract"

GET_AGENT_PROFILE = (PROFILE_MODULE, "get_agent_profile")
GET_ALL_AGENT_PROFILES = (PROFILE_MODULE, "get_all_agent_profiles")
GET_ESCROWS_AS_CLIENT = (CONTRACT_MODULE, "get_escrows_as_client")

AGENT_PROFILE_CREATED = (PROFILE_MODULE, "AgentProfileCreated")


def _http_url(var: str, value: str) -> str:
    if not value.startswith(("http://", "https://")):
        raise ConfigurationError(f"Invalid {var}: {value}. Must be an http(s) URL")
    return value.rstrip("/")


@dataclass(frozen=True)
class NetworkConfig:
    """Endpoints and package id of one AgentWave deployment."""

    rpc_url: str
    package_id: str
    walrus_aggregator: str = "https://aggregator.walrus-testnet.walrus.space"

    def target(self, module: str, name: str) -> str:
        """Render a fully qualified Move name: a call target or an event type."""
        return f"{self.package_id}::{module}::{name}"

    @property
    def profile_created_event_type(self) -> str:
        return self.target(*AGENT_PROFILE_CREATED)

    @classmethod
    def from_env(cls, base: "NetworkConfig | None" = None) -> "NetworkConfig":
        """
        Build a configuration from environment variables.

        Environment variables (each optional, falling back to ``base``):
            AGENTWAVE_RPC_URL: Fullnode JSON-RPC URL
            AGENTWAVE_PACKAGE_ID: Published package id
            AGENTWAVE_WALRUS_AGGREGATOR: Walrus aggregator base URL

        Args:
            base: Configuration supplying defaults (default: TESTNET)

        Returns:
            Configured NetworkConfig

        Raises:
            ConfigurationError: If a variable holds a malformed value
        """
        config = base or TESTNET
        overrides: dict[str, str] = {}

        rpc_url = os.environ.get("AGENTWAVE_RPC_URL")
        if rpc_url:
            overrides["rpc_url"] = _http_url("AGENTWAVE_RPC_URL", rpc_url)

        aggregator = os.environ.get("AGENTWAVE_WALRUS_AGGREGATOR")
        if aggregator:
            overrides["walrus_aggregator"] = _http_url("AGENTWAVE_WALRUS_AGGREGATOR", aggregator)

        package_id = os.environ.get("AGENTWAVE_PACKAGE_ID")
        if package_id:
            try:
                overrides["package_id"] = normalize_address(package_id)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid AGENTWAVE_PACKAGE_ID: {package_id}") from e

        return replace(config, **overrides)


# Deployment of 2026-02-17
TESTNET = NetworkConfig(
    rpc_url="https://fullnode.testnet.sui.io:443",
    package_id="0x3b306a587f6d4c6beedf8f086c0d6d8837479d67cf3c0a1a93cf7587ec0a3d73",
)
