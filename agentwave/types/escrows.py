"""Agentic escrow data models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import IntEnum

from agentwave.types.common import mist_to_sui, ms_to_datetime


class EscrowStatus(IntEnum):
    """Escrow lifecycle states as stored on chain (u8)."""

    PENDING = 0
    ACCEPTED = 1
    IN_PROGRESS = 2
    COMPLETED = 3
    DISPUTED = 4
    REFUNDED_CLIENT = 5
    REFUNDED_AGENT = 6
    RELEASED = 7
    CANCELLED = 8


STATUS_LABELS: dict[int, str] = {
    EscrowStatus.PENDING: "Pending",
    EscrowStatus.ACCEPTED: "Accepted",
    EscrowStatus.IN_PROGRESS: "In Progress",
    EscrowStatus.COMPLETED: "Completed",
    EscrowStatus.DISPUTED: "Disputed",
    EscrowStatus.REFUNDED_CLIENT: "Refunded (Client)",
    EscrowStatus.REFUNDED_AGENT: "Refunded (Agent)",
    EscrowStatus.RELEASED: "Released",
    EscrowStatus.CANCELLED: "Cancelled",
}


def status_label(status: int) -> str:
    """Human-readable label; values outside the enum render as "Status N"."""
    return STATUS_LABELS.get(status, f"Status {status}")


@dataclass(frozen=True)
class EscrowInfo:
    """
    Snapshot of one agentic escrow.

    ``status`` stays a plain int so values newer than ``EscrowStatus`` survive
    decoding. Amounts are in MIST.
    """

    escrow_id: str
    job_title: str
    client: str
    custodian: str
    job_description: str
    job_category: str
    duration: int  # days, 1 to 255
    budget: int
    current_balance: int
    status: int
    main_agent: str
    main_agent_price: int
    main_agent_paid: bool
    total_hired_agents: int
    blob_id: str | None  # set once a deliverable is uploaded
    created_at: int

    @property
    def status_label(self) -> str:
        return status_label(self.status)

    @property
    def known_status(self) -> EscrowStatus | None:
        """The status as an EscrowStatus, or None for unknown values."""
        try:
            return EscrowStatus(self.status)
        except ValueError:
            return None

    @property
    def is_done(self) -> bool:
        return self.status in (EscrowStatus.COMPLETED, EscrowStatus.RELEASED)

    @property
    def budget_sui(self) -> Decimal:
        return mist_to_sui(self.budget)

    @property
    def current_balance_sui(self) -> Decimal:
        return mist_to_sui(self.current_balance)

    @property
    def main_agent_price_sui(self) -> Decimal:
        return mist_to_sui(self.main_agent_price)

    @property
    def created_at_datetime(self) -> datetime | None:
        return ms_to_datetime(self.created_at)

    def blob_url(self, aggregator: str) -> str | None:
        """Walrus download URL of the deliverable, or None before upload."""
        if self.blob_id is None:
            return None
        return f"{aggregator.rstrip('/')}/v1/blobs/{self.blob_id}"
