"""
AgentWave SDK main client.

Runs read-only AgentWave queries against a Sui fullnode and decodes the
results into records. Decode failures and Move aborts never escape: they are
logged and replaced by placeholder or empty results. Transport errors do
propagate.
"""

from typing import Any

from agentwave.config import (
    GET_AGENT_PROFILE,
    GET_ALL_AGENT_PROFILES,
    GET_ESCROWS_AS_CLIENT,
    TESTNET,
    NetworkConfig,
)
from agentwave.decoding import (
    decode_agent_profile,
    decode_agent_profiles,
    decode_escrows,
    decode_profile_created_events,
)
from agentwave.exceptions import DecodeError, InspectError
from agentwave.logging import get_logger, log_decode_failure
from agentwave.shapes import ReturnValue
from agentwave.transport import HTTPTransport, RetryConfig
from agentwave.types.agents import AgentListing, AgentProfile
from agentwave.types.common import ZERO_ADDRESS, normalize_address
from agentwave.types.escrows import EscrowInfo

logger = get_logger()


class AgentWaveClient:
    """
    Client for AgentWave's read-only on-chain queries.

    Transaction construction stays with the caller: each query takes the
    base64 ``TransactionKind`` bytes of the matching Move call.

    Example:
        ```python
        from agentwave import AgentWaveClient

        with AgentWaveClient.from_env() as client:
            profile = client.get_agent_profile(owner, tx_bytes)
            print(profile.name, profile.capabilities)
        ```
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        config: NetworkConfig | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the AgentWave client.

        Args:
            config: Network configuration (default: TESTNET)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
        """
        self.config = config or TESTNET
        self.timeout = timeout

        self._transport = HTTPTransport(
            rpc_url=self.config.rpc_url,
            timeout=timeout,
            retry_config=retry_config,
        )

    @classmethod
    def from_env(
        cls,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> "AgentWaveClient":
        """
        Create a client configured from AGENTWAVE_* environment variables.

        Raises:
            ConfigurationError: If a variable holds a malformed value
        """
        return cls(
            config=NetworkConfig.from_env(),
            timeout=timeout,
            retry_config=retry_config,
        )

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying JSON-RPC transport (for advanced use cases)."""
        return self._transport

    def _inspect(self, target: str, tx_bytes: str, sender: str) -> list[ReturnValue] | None:
        """Run one devInspect call; None when it aborted or returned malformed entries."""
        logger.debug("Inspecting %s as %s", target, sender)
        try:
            return self._transport.dev_inspect(tx_bytes, sender)
        except InspectError as e:
            logger.warning("%s failed: %s", target, e.message)
        except DecodeError as e:
            log_decode_failure(f"{target} return values", e)
        return None

    def get_agent_profile(
        self, owner: str, tx_bytes: str, sender: str = ZERO_ADDRESS
    ) -> AgentProfile:
        """
        Look up one agent profile by owner address.

        Args:
            owner: Profile owner address
            tx_bytes: Base64 TransactionKind calling agentwave_profile::get_agent_profile
            sender: Simulation sender (default: the zero address)

        Returns:
            The decoded profile, or a placeholder built from ``owner``

        Raises:
            ValidationError: If ``owner`` is not a valid address
        """
        owner = normalize_address(owner)
        return_values = self._inspect(self.config.target(*GET_AGENT_PROFILE), tx_bytes, sender)
        if return_values is None:
            return AgentProfile.placeholder(owner)
        return decode_agent_profile(owner, return_values)

    def list_agent_profiles(
        self, tx_bytes: str, sender: str = ZERO_ADDRESS
    ) -> list[AgentProfile]:
        """
        List every registered agent profile, in registry order.

        Returns:
            Decoded profiles, empty if the response could not be decoded
        """
        return_values = self._inspect(self.config.target(*GET_ALL_AGENT_PROFILES), tx_bytes, sender)
        if return_values is None:
            return []
        return decode_agent_profiles(return_values)

    def list_agent_profile_events(self, limit: int = 50) -> list[AgentListing]:
        """
        List recently registered agents from AgentProfileCreated events.

        Needs no prepared transaction. Newest registrations come first and
        each owner appears once.

        Args:
            limit: Number of events to fetch (default: 50)

        Returns:
            Directory entries, newest first
        """
        page = self._transport.query_events(
            self.config.profile_created_event_type, limit=limit, descending=True
        )
        return decode_profile_created_events(page.get("data") or [])

    def get_escrows_as_client(self, client_address: str, tx_bytes: str) -> list[EscrowInfo]:
        """
        List the escrows a client address has created.

        The simulation runs as the client itself.

        Returns:
            Decoded escrows, empty if the response could not be decoded
        """
        client_address = normalize_address(client_address)
        return_values = self._inspect(
            self.config.target(*GET_ESCROWS_AS_CLIENT), tx_bytes, client_address
        )
        if return_values is None:
            return []
        return decode_escrows(return_values)

    def blob_url(self, escrow: EscrowInfo) -> str | None:
        """Walrus URL of an escrow's deliverable on the configured aggregator."""
        return escrow.blob_url(self.config.walrus_aggregator)

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "AgentWaveClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()
