"""Agent profile data model."""

from dataclasses import dataclass
from datetime import datetime

from agentwave.types.common import ms_to_datetime


@dataclass(frozen=True)
class AgentProfile:
    """On-chain agent profile from the agentwave_profile registry."""

    owner: str
    avatar: str  # URL or empty
    name: str
    capabilities: tuple[str, ...]
    description: str
    rating: int  # 0 to 100 by convention
    total_reviews: int
    completed_tasks: int
    created_at: int  # Unix ms, 0 when unknown
    model_type: str
    is_active: bool

    def __post_init__(self) -> None:
        if not isinstance(self.capabilities, tuple):
            object.__setattr__(self, "capabilities", tuple(self.capabilities))

    @property
    def created_at_datetime(self) -> datetime | None:
        return ms_to_datetime(self.created_at)

    @classmethod
    def placeholder(cls, owner: str) -> "AgentProfile":
        """
        Build the minimal profile shown when the on-chain record can't be decoded.

        Only the owner address is known; the name is its first ten characters.
        """
        return cls(
            owner=owner,
            avatar="",
            name=owner[:10] + "...",
            capabilities=(),
            description="",
            rating=0,
            total_reviews=0,
            completed_tasks=0,
            created_at=0,
            model_type="",
            is_active=True,
        )


@dataclass(frozen=True)
class AgentListing:
    """
    One entry of the agent directory, built from an AgentProfileCreated event.

    Events only carry the owner, the name at registration time and a
    timestamp; fetch the full ``AgentProfile`` for anything else.
    """

    owner: str
    name: str
    timestamp: int | None = None  # Unix ms

    @property
    def timestamp_datetime(self) -> datetime | None:
        return ms_to_datetime(self.timestamp or 0)
