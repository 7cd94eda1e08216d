"""
Async JSON-RPC transport for AgentWave SDK.

Same protocol handling and retry policy as ``HTTPTransport`` on top of the
httpx async client.
"""

import asyncio
import itertools
import time
from collections.abc import Callable, Coroutine
from typing import Any

import httpx

from agentwave.exceptions import AgentWaveError, ServerError
from agentwave.logging import log_rpc_request, log_rpc_response
from agentwave.shapes import ReturnValue
from agentwave.transport import (
    DEV_INSPECT_METHOD,
    QUERY_EVENTS_METHOD,
    RetryConfig,
    build_event_query_params,
    build_rpc_payload,
    get_backoff_time,
    parse_error_response,
    parse_return_values,
    parse_rpc_result,
)


class AsyncHTTPTransport:
    """
    Async JSON-RPC transport to a Sui fullnode.

    Handles:
    - Exponential backoff with jitter for retries
    - Retry-After header respect for rate limiting
    - JSON-RPC and HTTP error parsing into typed exceptions
    """

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
    ) -> None:
        self.rpc_url = rpc_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()
        self._request_ids = itertools.count(1)

        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def call(self, method: str, params: list[Any]) -> Any:
        """Make a JSON-RPC call with automatic retry and return its result."""
        payload = build_rpc_payload(next(self._request_ids), method, params)

        async def make_request() -> httpx.Response:
            log_rpc_request(method, self.rpc_url, params)
            return await self._client.post(self.rpc_url, json=payload)

        return parse_rpc_result(await self._execute_with_retry(make_request))

    async def dev_inspect(
        self,
        tx_bytes: str,
        sender: str,
        command_index: int = 0,
    ) -> list[ReturnValue]:
        """
        Simulate a read-only transaction and return its raw return values.

        Args:
            tx_bytes: Base64 BCS TransactionKind built by the caller
            sender: Address the simulation runs as
            command_index: Index of the Move call whose values to return
        """
        result = await self.call(DEV_INSPECT_METHOD, [sender, tx_bytes, None, None])
        return parse_return_values(result, command_index)

    async def query_events(
        self,
        event_type: str,
        limit: int = 50,
        descending: bool = True,
        cursor: Any = None,
    ) -> dict[str, Any]:
        """Fetch one page of Move events of a given type."""
        result = await self.call(
            QUERY_EVENTS_METHOD, build_event_query_params(event_type, limit, descending, cursor)
        )
        return result if isinstance(result, dict) else {}

    async def _execute_with_retry(
        self, request_fn: Callable[[], Coroutine[Any, Any, httpx.Response]]
    ) -> dict[str, Any]:
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                started = time.monotonic()
                response = await request_fn()
                log_rpc_response(
                    response.status_code,
                    self.rpc_url,
                    elapsed_ms=(time.monotonic() - started) * 1000,
                )

                if response.status_code < 400:
                    return response.json()

                error = parse_error_response(response)

                if not self._should_retry(response.status_code, attempt):
                    raise error

                last_error = error

                retry_after = response.headers.get("Retry-After")
                await asyncio.sleep(self._get_backoff_time(attempt, retry_after))

            except httpx.RequestError as e:
                if attempt >= self.retry_config.max_retries:
                    raise ServerError("CONNECTION_ERROR", str(e)) from e

                last_error = e
                await asyncio.sleep(self._get_backoff_time(attempt, None))

        if last_error:
            if isinstance(last_error, AgentWaveError):
                raise last_error
            raise ServerError("MAX_RETRIES_EXCEEDED", str(last_error))

        raise ServerError("UNKNOWN_ERROR", "Request failed with no error details")

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        if attempt >= self.retry_config.max_retries:
            return False
        return status_code in self.retry_config.retry_on

    def _get_backoff_time(self, attempt: int, retry_after: str | None) -> float:
        return get_backoff_time(self.retry_config, attempt, retry_after)
