"""Shared value helpers for addresses, SUI amounts and chain timestamps."""

import re
from datetime import datetime, timezone
from decimal import Decimal

from agentwave.exceptions import ValidationError

ZERO_ADDRESS = "0x" + "0" * 64

MIST_PER_SUI = 1_000_000_000

_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]{1,64}$")


def normalize_address(value: str) -> str:
    """
    Normalize an address to lowercase 0x-prefixed 64-digit hex.

    Short forms such as "0x6" are left-padded with zeros.

    Raises:
        ValidationError: If the value is not 1-64 hex digits
    """
    digits = value.strip()
    if digits.startswith(("0x", "0X")):
        digits = digits[2:]
    if not _HEX_PATTERN.match(digits):
        raise ValidationError(f"Invalid address: {value!r}")
    return "0x" + digits.lower().rjust(64, "0")


def mist_to_sui(mist: int) -> Decimal:
    """Convert MIST to SUI exactly."""
    return Decimal(mist) / MIST_PER_SUI


def format_sui(mist: int) -> str:
    """Format a MIST amount for display: 2 decimals from 1 SUI up, 4 below."""
    sui = mist_to_sui(mist)
    if sui >= 1:
        return f"{sui:.2f}"
    return f"{sui:.4f}"


def ms_to_datetime(timestamp_ms: int) -> datetime | None:
    """Convert chain milliseconds to an aware UTC datetime; 0 means unknown."""
    if not timestamp_ms:
        return None
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
