"""AgentWave SDK exception classes."""


class AgentWaveError(Exception):
    """Base exception for all AgentWave SDK errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(AgentWaveError):
    """Raised when SDK configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class ValidationError(AgentWaveError):
    """Raised on invalid caller input (malformed addresses, etc.)."""

    def __init__(self, message: str) -> None:
        super().__init__("VALIDATION_ERROR", message)


# ============================================================================
# Decode errors
# ============================================================================


class DecodeError(AgentWaveError):
    """Base class for BCS decode failures.

    ``offset`` is the cursor position at which the failure was detected,
    when known.
    """

    def __init__(self, code: str, message: str, offset: int | None = None) -> None:
        super().__init__(code, message)
        self.offset = offset


class BufferUnderrun(DecodeError):
    """Raised when a read needs more bytes than remain in the buffer."""

    def __init__(self, needed: int, remaining: int, offset: int) -> None:
        super().__init__(
            "BUFFER_UNDERRUN",
            f"need {needed} byte(s) at offset {offset}, {remaining} remaining",
            offset,
        )
        self.needed = needed
        self.remaining = remaining


class MalformedVarint(DecodeError):
    """Raised when a ULEB128 value never terminates within the byte budget."""

    def __init__(self, max_bytes: int, offset: int) -> None:
        super().__init__(
            "MALFORMED_VARINT",
            f"ULEB128 at offset {offset} exceeds {max_bytes} bytes",
            offset,
        )
        self.max_bytes = max_bytes


class UnexpectedShape(DecodeError):
    """Raised when a query response matches neither known wire shape."""

    def __init__(self, message: str, blob_count: int) -> None:
        super().__init__("UNEXPECTED_SHAPE", message)
        self.blob_count = blob_count


class MalformedReturnValue(DecodeError):
    """Raised when a devInspect return value entry carries no usable bytes."""

    def __init__(self, position: int, reason: str) -> None:
        super().__init__(
            "MALFORMED_RETURN_VALUE",
            f"return value {position}: {reason}",
        )
        self.position = position


class Utf8DecodeError(DecodeError):
    """Raised when string bytes are not valid UTF-8."""

    def __init__(self, reason: str, offset: int) -> None:
        super().__init__(
            "UTF8_DECODE_ERROR",
            f"invalid UTF-8 string at offset {offset}: {reason}",
            offset,
        )


# ============================================================================
# RPC errors
# ============================================================================


class RpcError(AgentWaveError):
    """Raised on JSON-RPC error objects and unexpected HTTP statuses."""

    pass


class InspectError(RpcError):
    """Raised when the simulated Move call itself failed (e.g. an abort)."""

    pass


class RateLimitedError(AgentWaveError):
    """Raised when rate limited."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.retry_after = retry_after


class ServerError(AgentWaveError):
    """Raised on server errors (5xx) and connection failures."""

    pass
