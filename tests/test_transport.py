"""
Tests for the JSON-RPC transport: retry behavior, error mapping and
devInspect result parsing.

Feature: agentwave-sdk
"""

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from agentwave.async_transport import AsyncHTTPTransport
from agentwave.exceptions import (
    DecodeError,
    InspectError,
    MalformedReturnValue,
    RateLimitedError,
    RpcError,
    ServerError,
)
from agentwave.shapes import ReturnValue
from agentwave.testing.encoder import to_rpc_return_values
from agentwave.transport import (
    DEV_INSPECT_METHOD,
    QUERY_EVENTS_METHOD,
    HTTPTransport,
    RetryConfig,
    parse_return_values,
    parse_rpc_result,
)

RPC_URL = "https://fullnode.testnet.sui.io:443"

# Test strategies
backoff_factor_strategy = st.floats(min_value=1.1, max_value=5.0)
attempt_strategy = st.integers(min_value=0, max_value=5)
retry_after_strategy = st.integers(min_value=1, max_value=120)


def make_response(status_code: int, body: Any = None, headers: dict[str, str] | None = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body if body is not None else {}
    response.headers = headers or {}
    return response


def inspect_body(return_values: list[ReturnValue]) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": 1,
        "result": {
            "effects": {"status": {"status": "success"}},
            "results": [{"returnValues": to_rpc_return_values(return_values)}],
        },
    }


@given(
    backoff_factor=backoff_factor_strategy,
    attempt=attempt_strategy,
)
@settings(max_examples=100)
def test_exponential_backoff_timing(backoff_factor: float, attempt: int) -> None:
    """
    For any retry configuration with backoff_factor B and attempt number N,
    the wait time before attempt N is approximately B^N seconds (with jitter).
    """
    config = RetryConfig(
        backoff_factor=backoff_factor,
        jitter=0.1,
        max_backoff=1000.0,
    )
    transport = HTTPTransport(rpc_url=RPC_URL, retry_config=config)

    expected_base = backoff_factor ** attempt
    actual = transport._get_backoff_time(attempt, None)

    min_expected = min(expected_base * 0.9, config.max_backoff)
    max_expected = min(expected_base * 1.1, config.max_backoff)

    assert min_expected <= actual <= max_expected


@given(retry_after=retry_after_strategy)
@settings(max_examples=100)
def test_retry_after_header_respected(retry_after: int) -> None:
    transport = HTTPTransport(rpc_url=RPC_URL, retry_config=RetryConfig(respect_retry_after=True))

    assert transport._get_backoff_time(0, str(retry_after)) == float(retry_after)


def test_backoff_capped_at_max() -> None:
    transport = HTTPTransport(
        rpc_url=RPC_URL, retry_config=RetryConfig(backoff_factor=10.0, max_backoff=5.0)
    )

    assert transport._get_backoff_time(4, None) == 5.0


@given(
    status_code=st.sampled_from([400, 401, 403, 404, 409]),
    attempt=st.integers(min_value=0, max_value=2),
)
@settings(max_examples=50)
def test_no_retry_on_non_retryable_errors(status_code: int, attempt: int) -> None:
    transport = HTTPTransport(rpc_url=RPC_URL)

    assert not transport._should_retry(status_code, attempt)


@given(
    status_code=st.sampled_from([429, 500, 502, 503]),
    attempt=st.integers(min_value=0, max_value=2),
)
@settings(max_examples=50)
def test_retry_on_retryable_errors(status_code: int, attempt: int) -> None:
    transport = HTTPTransport(rpc_url=RPC_URL, retry_config=RetryConfig(max_retries=3))

    assert transport._should_retry(status_code, attempt)


def test_no_retry_after_max_attempts() -> None:
    transport = HTTPTransport(rpc_url=RPC_URL, retry_config=RetryConfig(max_retries=2))

    assert not transport._should_retry(503, 2)


# ============================================================================
# Result parsing
# ============================================================================


def test_parse_return_values_reads_bytes_and_tags() -> None:
    result = {
        "effects": {"status": {"status": "success"}},
        "results": [
            {"returnValues": [[[4, 66, 111, 116, 49], "0x1::string::String"], [[1], "bool"]]}
        ],
    }

    values = parse_return_values(result)

    assert values == [
        ReturnValue(b"\x04Bot1", "0x1::string::String"),
        ReturnValue(b"\x01", "bool"),
    ]


def test_parse_return_values_accepts_base64_and_missing_tags() -> None:
    result = {"results": [{"returnValues": [["AQ=="]]}]}

    assert parse_return_values(result) == [ReturnValue(b"\x01", None)]


def test_parse_return_values_without_results() -> None:
    assert parse_return_values({"effects": {"status": {"status": "success"}}}) == []
    assert parse_return_values({"results": [{}]}) == []
    assert parse_return_values({"results": [{"returnValues": []}]}, command_index=3) == []


def test_parse_return_values_selects_command() -> None:
    result = {"results": [{"returnValues": []}, {"returnValues": [[[7], "u8"]]}]}

    assert parse_return_values(result, command_index=1) == [ReturnValue(b"\x07", "u8")]


@pytest.mark.parametrize(
    "entry",
    [
        ["!!!not-base64", "u64"],
        [[300, 1], "u64"],
        [[-1], "u8"],
        [],
        [7, "u8"],
        [[1.5], "u8"],
        [[1], 5],
        "AQ==",
    ],
)
def test_malformed_return_value_raises_decode_error(entry: Any) -> None:
    result = {"results": [{"returnValues": [[[1], "bool"], entry]}]}

    with pytest.raises(MalformedReturnValue) as exc_info:
        parse_return_values(result)

    assert isinstance(exc_info.value, DecodeError)
    assert exc_info.value.code == "MALFORMED_RETURN_VALUE"
    assert exc_info.value.position == 1


def test_move_abort_raises_inspect_error() -> None:
    result = {
        "effects": {"status": {"status": "failure", "error": "MoveAbort(..., 1)"}},
        "error": "MoveAbort(..., 1) in command 0",
    }

    with pytest.raises(InspectError) as exc_info:
        parse_return_values(result)

    assert exc_info.value.code == "MOVE_EXECUTION_FAILED"
    assert "MoveAbort" in exc_info.value.message


def test_jsonrpc_error_object() -> None:
    with pytest.raises(RpcError) as exc_info:
        parse_rpc_result({"jsonrpc": "2.0", "id": 1, "error": {"code": -32602, "message": "Invalid params"}})

    assert exc_info.value.code == "RPC_-32602"
    assert exc_info.value.message == "Invalid params"


def test_jsonrpc_body_without_result() -> None:
    with pytest.raises(RpcError):
        parse_rpc_result({"jsonrpc": "2.0", "id": 1})


# ============================================================================
# Request flow
# ============================================================================


def test_dev_inspect_posts_jsonrpc_request() -> None:
    transport = HTTPTransport(rpc_url=RPC_URL + "/")
    values = [ReturnValue(b"\x01", "bool")]
    transport._client = MagicMock()
    transport._client.post.return_value = make_response(200, inspect_body(values))

    result = transport.dev_inspect("AAEC", "0x" + "00" * 32)

    assert result == values
    url = transport._client.post.call_args.args[0]
    payload = transport._client.post.call_args.kwargs["json"]
    assert url == RPC_URL
    assert payload["jsonrpc"] == "2.0"
    assert payload["method"] == DEV_INSPECT_METHOD
    assert payload["params"] == ["0x" + "00" * 32, "AAEC", None, None]


def test_query_events_posts_event_filter() -> None:
    page = {"data": [{"parsedJson": {"owner": "0x1"}}], "nextCursor": None, "hasNextPage": False}
    transport = HTTPTransport(rpc_url=RPC_URL)
    transport._client = MagicMock()
    transport._client.post.return_value = make_response(200, {"jsonrpc": "2.0", "id": 1, "result": page})

    result = transport.query_events("0x3b::agentwave_profile::AgentProfileCreated", limit=50)

    assert result == page
    payload = transport._client.post.call_args.kwargs["json"]
    assert payload["method"] == QUERY_EVENTS_METHOD
    assert payload["params"] == [
        {"MoveEventType": "0x3b::agentwave_profile::AgentProfileCreated"},
        None,
        50,
        True,
    ]


def test_request_ids_increase() -> None:
    transport = HTTPTransport(rpc_url=RPC_URL)
    transport._client = MagicMock()
    transport._client.post.return_value = make_response(200, inspect_body([]))

    transport.dev_inspect("AA==", "0x0")
    transport.dev_inspect("AA==", "0x0")

    ids = [call.kwargs["json"]["id"] for call in transport._client.post.call_args_list]
    assert ids == [1, 2]


@patch("agentwave.transport.time.sleep")
def test_retries_then_succeeds(mock_sleep: MagicMock) -> None:
    transport = HTTPTransport(rpc_url=RPC_URL, retry_config=RetryConfig(max_retries=3))
    transport._client = MagicMock()
    transport._client.post.side_effect = [
        make_response(503),
        make_response(429, headers={"Retry-After": "2"}),
        make_response(200, inspect_body([ReturnValue(b"\x00", "bool")])),
    ]

    result = transport.dev_inspect("AA==", "0x0")

    assert result == [ReturnValue(b"\x00", "bool")]
    assert transport._client.post.call_count == 3
    assert mock_sleep.call_count == 2
    assert mock_sleep.call_args_list[1].args[0] == 2.0


@patch("agentwave.transport.time.sleep")
def test_rate_limited_after_retries_exhausted(mock_sleep: MagicMock) -> None:
    transport = HTTPTransport(rpc_url=RPC_URL, retry_config=RetryConfig(max_retries=1))
    transport._client = MagicMock()
    transport._client.post.return_value = make_response(429, headers={"Retry-After": "7"})

    with pytest.raises(RateLimitedError) as exc_info:
        transport.call("sui_getChainIdentifier", [])

    assert exc_info.value.retry_after == 7
    assert transport._client.post.call_count == 2


@patch("agentwave.transport.time.sleep")
def test_server_error_mapping(mock_sleep: MagicMock) -> None:
    transport = HTTPTransport(rpc_url=RPC_URL, retry_config=RetryConfig(max_retries=0))
    transport._client = MagicMock()
    transport._client.post.return_value = make_response(502, {"error": {"message": "bad gateway"}})

    with pytest.raises(ServerError) as exc_info:
        transport.call("sui_getChainIdentifier", [])

    assert exc_info.value.message == "bad gateway"
    mock_sleep.assert_not_called()


def test_client_error_is_not_retried() -> None:
    transport = HTTPTransport(rpc_url=RPC_URL)
    transport._client = MagicMock()
    transport._client.post.return_value = make_response(400)

    with pytest.raises(RpcError) as exc_info:
        transport.call("sui_getChainIdentifier", [])

    assert exc_info.value.code == "HTTP_400"
    assert transport._client.post.call_count == 1


@patch("agentwave.transport.time.sleep")
def test_connection_errors_become_server_error(mock_sleep: MagicMock) -> None:
    transport = HTTPTransport(rpc_url=RPC_URL, retry_config=RetryConfig(max_retries=2))
    transport._client = MagicMock()
    transport._client.post.side_effect = httpx.ConnectError("connection refused")

    with pytest.raises(ServerError) as exc_info:
        transport.call("sui_getChainIdentifier", [])

    assert exc_info.value.code == "CONNECTION_ERROR"
    assert transport._client.post.call_count == 3


def test_transport_context_manager() -> None:
    with HTTPTransport(rpc_url=RPC_URL) as transport:
        transport._client = MagicMock()
    transport._client.close.assert_called_once()


# ============================================================================
# Async transport
# ============================================================================


def test_async_dev_inspect() -> None:
    values = [ReturnValue(b"\x2a", "u8")]

    async def run() -> list[ReturnValue]:
        transport = AsyncHTTPTransport(rpc_url=RPC_URL)
        await transport._client.aclose()
        transport._client = MagicMock()
        transport._client.post = AsyncMock(return_value=make_response(200, inspect_body(values)))
        transport._client.aclose = AsyncMock()
        async with transport:
            return await transport.dev_inspect("AA==", "0x0")

    assert asyncio.run(run()) == values


@patch("agentwave.async_transport.asyncio.sleep", new_callable=AsyncMock)
def test_async_retries_then_raises(mock_sleep: AsyncMock) -> None:
    async def run() -> None:
        transport = AsyncHTTPTransport(rpc_url=RPC_URL, retry_config=RetryConfig(max_retries=1))
        await transport._client.aclose()
        transport._client = MagicMock()
        transport._client.post = AsyncMock(return_value=make_response(500))
        await transport.call("sui_getChainIdentifier", [])

    with pytest.raises(ServerError):
        asyncio.run(run())

    assert mock_sleep.await_count == 1
