"""
AgentWave SDK async client.

Async counterpart of ``AgentWaveClient`` with the same fallback behavior.
"""

from typing import Any

from agentwave.async_transport import AsyncHTTPTransport
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
from agentwave.transport import RetryConfig
from agentwave.types.agents import AgentListing, AgentProfile
from agentwave.types.common import ZERO_ADDRESS, normalize_address
from agentwave.types.escrows import EscrowInfo

logger = get_logger()


class AsyncAgentWaveClient:
    """
    Async client for AgentWave's read-only on-chain queries.

    Example:
        ```python
        import asyncio
        from agentwave import AsyncAgentWaveClient

        async def main():
            async with AsyncAgentWaveClient.from_env() as client:
                escrows = await client.get_escrows_as_client(me, tx_bytes)

        asyncio.run(main())
        ```
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        config: NetworkConfig | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> None:
        self.config = config or TESTNET
        self.timeout = timeout

        self._transport = AsyncHTTPTransport(
            rpc_url=self.config.rpc_url,
            timeout=timeout,
            retry_config=retry_config,
        )

    @classmethod
    def from_env(
        cls,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> "AsyncAgentWaveClient":
        """Create a client configured from AGENTWAVE_* environment variables."""
        return cls(
            config=NetworkConfig.from_env(),
            timeout=timeout,
            retry_config=retry_config,
        )

    @property
    def transport(self) -> AsyncHTTPTransport:
        return self._transport

    async def _inspect(
        self, target: str, tx_bytes: str, sender: str
    ) -> list[ReturnValue] | None:
        logger.debug("Inspecting %s as %s", target, sender)
        try:
            return await self._transport.dev_inspect(tx_bytes, sender)
        except InspectError as e:
            logger.warning("%s failed: %s", target, e.message)
        except DecodeError as e:
            log_decode_failure(f"{target} return values", e)
        return None

    async def get_agent_profile(
        self, owner: str, tx_bytes: str, sender: str = ZERO_ADDRESS
    ) -> AgentProfile:
        """Look up one agent profile; placeholder on decode failure or abort."""
        owner = normalize_address(owner)
        return_values = await self._inspect(
            self.config.target(*GET_AGENT_PROFILE), tx_bytes, sender
        )
        if return_values is None:
            return AgentProfile.placeholder(owner)
        return decode_agent_profile(owner, return_values)

    async def list_agent_profiles(
        self, tx_bytes: str, sender: str = ZERO_ADDRESS
    ) -> list[AgentProfile]:
        return_values = await self._inspect(
            self.config.target(*GET_ALL_AGENT_PROFILES), tx_bytes, sender
        )
        if return_values is None:
            return []
        return decode_agent_profiles(return_values)

    async def list_agent_profile_events(self, limit: int = 50) -> list[AgentListing]:
        """List recently registered agents from AgentProfileCreated events, newest first."""
        page = await self._transport.query_events(
            self.config.profile_created_event_type, limit=limit, descending=True
        )
        return decode_profile_created_events(page.get("data") or [])

    async def get_escrows_as_client(
        self, client_address: str, tx_bytes: str
    ) -> list[EscrowInfo]:
        client_address = normalize_address(client_address)
        return_values = await self._inspect(
            self.config.target(*GET_ESCROWS_AS_CLIENT), tx_bytes, client_address
        )
        if return_values is None:
            return []
        return decode_escrows(return_values)

    def blob_url(self, escrow: EscrowInfo) -> str | None:
        """Walrus URL of an escrow's deliverable on the configured aggregator."""
        return escrow.blob_url(self.config.walrus_aggregator)

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncAgentWaveClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
