"""
JSON-RPC transport for AgentWave SDK.

Talks to a Sui fullnode over HTTP with automatic retry logic and error
handling, and turns devInspect results into raw return values for the
decoders.
"""

import base64
import binascii
import itertools
import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from agentwave.exceptions import (
    AgentWaveError,
    InspectError,
    MalformedReturnValue,
    RateLimitedError,
    RpcError,
    ServerError,
)
from agentwave.logging import log_rpc_request, log_rpc_response
from agentwave.shapes import ReturnValue

DEV_INSPECT_METHOD = "sui_devInspectTransactionBlock"
QUERY_EVENTS_METHOD = "suix_queryEvents"


def build_event_query_params(
    event_type: str, limit: int, descending: bool, cursor: Any = None
) -> list[Any]:
    return [{"MoveEventType": event_type}, cursor, limit, descending]


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


def build_rpc_payload(request_id: int, method: str, params: list[Any]) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}


def parse_rpc_result(data: dict[str, Any]) -> Any:
    """
    Extract ``result`` from a JSON-RPC response body.

    Raises:
        RpcError: If the body carries a JSON-RPC error object
    """
    error = data.get("error")
    if error is not None:
        if isinstance(error, dict):
            code = error.get("code", "UNKNOWN")
            message = error.get("message", "JSON-RPC error")
        else:
            code, message = "UNKNOWN", str(error)
        raise RpcError(f"RPC_{code}", message)
    if "result" not in data:
        raise RpcError("INVALID_RESPONSE", "JSON-RPC response has neither result nor error")
    return data["result"]


def _return_value_bytes(raw: Any, position: int) -> bytes:
    # Fullnodes report bytes as a list of ints; some gateways use base64
    try:
        if isinstance(raw, str):
            return base64.b64decode(raw, validate=True)
        if isinstance(raw, (list, tuple)):
            return bytes(raw)
    except (binascii.Error, ValueError, TypeError) as e:
        raise MalformedReturnValue(position, str(e)) from e
    raise MalformedReturnValue(position, f"unsupported byte encoding {type(raw).__name__}")


def _return_value(entry: Any, position: int) -> ReturnValue:
    if not isinstance(entry, (list, tuple)) or not entry:
        raise MalformedReturnValue(position, f"expected [bytes, type_tag], got {entry!r}")
    type_tag = entry[1] if len(entry) > 1 else None
    if type_tag is not None and not isinstance(type_tag, str):
        raise MalformedReturnValue(position, f"type tag {type_tag!r} is not a string")
    return ReturnValue(data=_return_value_bytes(entry[0], position), type_tag=type_tag or None)


def parse_return_values(result: dict[str, Any], command_index: int = 0) -> list[ReturnValue]:
    """
    Read the return values of one command from a devInspect result.

    Each entry is a ``[bytes, type_tag]`` pair.

    Args:
        result: The ``result`` object of sui_devInspectTransactionBlock
        command_index: Index of the Move call within the transaction

    Returns:
        Return values in call order; empty if the command returned nothing

    Raises:
        InspectError: If the simulated execution failed
        MalformedReturnValue: If an entry is not a well-formed byte payload
    """
    execution_error = result.get("error")
    status = result.get("effects", {}).get("status", {})
    if execution_error or status.get("status") == "failure":
        raise InspectError(
            "MOVE_EXECUTION_FAILED",
            str(execution_error or status.get("error", "execution failed")),
        )

    results = result.get("results") or []
    if command_index >= len(results):
        return []

    entries = results[command_index].get("returnValues") or []
    return [_return_value(entry, position) for position, entry in enumerate(entries)]


def parse_error_response(response: httpx.Response) -> AgentWaveError:
    """
    Parse an HTTP error response into a typed exception.

    Args:
        response: HTTP response with error status

    Returns:
        Appropriate AgentWaveError subclass
    """
    try:
        data = response.json()
    except ValueError:
        data = {}

    error = data.get("error", {}) if isinstance(data, dict) else {}
    if not isinstance(error, dict):
        error = {"message": str(error)}
    status_code = response.status_code
    code = str(error.get("code", f"HTTP_{status_code}"))
    message = error.get("message", f"HTTP {status_code}")

    if status_code == 429:
        retry_after_str = response.headers.get("Retry-After", "60")
        try:
            retry_after = int(retry_after_str)
        except ValueError:
            retry_after = 60
        return RateLimitedError(code, message, retry_after)
    elif status_code >= 500:
        return ServerError(code, message)
    else:
        return RpcError(code, message)


def get_backoff_time(
    retry_config: RetryConfig, attempt: int, retry_after: str | None
) -> float:
    """
    Calculate backoff time for retry.

    Uses exponential backoff with jitter, respecting Retry-After header
    if present.

    Args:
        retry_config: Retry policy
        attempt: Current attempt number (0-indexed)
        retry_after: Value of Retry-After header (if present)

    Returns:
        Time to wait in seconds
    """
    if retry_after and retry_config.respect_retry_after:
        try:
            return float(retry_after)
        except ValueError:
            pass  # Fall through to exponential backoff

    base_wait = retry_config.backoff_factor ** attempt

    # Apply jitter (±jitter%)
    jitter_range = base_wait * retry_config.jitter
    jitter = random.uniform(-jitter_range, jitter_range)
    wait_time = base_wait + jitter

    return min(wait_time, retry_config.max_backoff)


class HTTPTransport:
    """
    JSON-RPC transport to a Sui fullnode.

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
        """
        Initialize HTTP transport.

        Args:
            rpc_url: Fullnode JSON-RPC URL (e.g., "https://fullnode.testnet.sui.io:443")
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
        """
        self.rpc_url = rpc_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()
        self._request_ids = itertools.count(1)

        self._client = httpx.Client(
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def call(self, method: str, params: list[Any]) -> Any:
        """
        Make a JSON-RPC call with automatic retry.

        Args:
            method: JSON-RPC method name
            params: Positional parameters

        Returns:
            The ``result`` member of the response

        Raises:
            AgentWaveError: On HTTP or JSON-RPC errors
        """
        payload = build_rpc_payload(next(self._request_ids), method, params)

        def make_request() -> httpx.Response:
            log_rpc_request(method, self.rpc_url, params)
            return self._client.post(self.rpc_url, json=payload)

        return parse_rpc_result(self._execute_with_retry(make_request))

    def dev_inspect(
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

        Returns:
            Raw return values of that command

        Raises:
            InspectError: If the Move call aborted
            MalformedReturnValue: If a return value entry is not a byte payload
            AgentWaveError: On transport errors
        """
        result = self.call(DEV_INSPECT_METHOD, [sender, tx_bytes, None, None])
        return parse_return_values(result, command_index)

    def query_events(
        self,
        event_type: str,
        limit: int = 50,
        descending: bool = True,
        cursor: Any = None,
    ) -> dict[str, Any]:
        """
        Fetch one page of Move events of a given type.

        Returns:
            The page object: ``data`` (events), ``nextCursor``, ``hasNextPage``
        """
        result = self.call(
            QUERY_EVENTS_METHOD, build_event_query_params(event_type, limit, descending, cursor)
        )
        return result if isinstance(result, dict) else {}

    def _execute_with_retry(
        self, request_fn: Callable[[], httpx.Response]
    ) -> dict[str, Any]:
        """
        Execute a request with automatic retry on retryable errors.

        Args:
            request_fn: Function that makes the HTTP request

        Returns:
            Parsed JSON response

        Raises:
            AgentWaveError: On non-retryable errors or after max retries
        """
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                started = time.monotonic()
                response = request_fn()
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
                time.sleep(self._get_backoff_time(attempt, retry_after))

            except httpx.RequestError as e:
                # Network errors are retryable
                if attempt >= self.retry_config.max_retries:
                    raise ServerError("CONNECTION_ERROR", str(e)) from e

                last_error = e
                time.sleep(self._get_backoff_time(attempt, None))

        if last_error:
            if isinstance(last_error, AgentWaveError):
                raise last_error
            raise ServerError("MAX_RETRIES_EXCEEDED", str(last_error))

        raise ServerError("UNKNOWN_ERROR", "Request failed with no error details")

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        """
        Determine if a request should be retried.

        Args:
            status_code: HTTP status code
            attempt: Current attempt number (0-indexed)

        Returns:
            True if the request should be retried
        """
        if attempt >= self.retry_config.max_retries:
            return False

        return status_code in self.retry_config.retry_on

    def _get_backoff_time(self, attempt: int, retry_after: str | None) -> float:
        return get_backoff_time(self.retry_config, attempt, retry_after)
