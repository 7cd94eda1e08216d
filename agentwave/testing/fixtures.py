"""
Pytest fixtures for AgentWave SDK testing.

Provides sample records, their encoded wire forms and a mock client.
"""

from collections.abc import Generator
from typing import Any

import pytest

from agentwave.shapes import ReturnValue
from agentwave.testing.encoder import (
    encode_agent_profile_list,
    encode_escrow_list,
    profile_return_values,
)
from agentwave.testing.mock import MockAgentWaveClient
from agentwave.types.agents import AgentProfile
from agentwave.types.escrows import EscrowInfo, EscrowStatus

SAMPLE_OWNER = "0x" + "ab" * 32
SAMPLE_CLIENT = "0x" + "c1" * 32
SAMPLE_CUSTODIAN = "0x" + "0c" * 32


def create_sample_agent_profile(**overrides: object) -> AgentProfile:
    """Build the reference "Bot1" profile, with optional field overrides."""
    fields: dict[str, object] = {
        "owner": SAMPLE_OWNER,
        "avatar": "",
        "name": "Bot1",
        "capabilities": ("dev", "design"),
        "description": "Hi",
        "rating": 90,
        "total_reviews": 12,
        "completed_tasks": 5,
        "created_at": 1_700_000_000_000,
        "model_type": "gpt-5",
        "is_active": True,
    }
    fields.update(overrides)
    return AgentProfile(**fields)  # type: ignore[arg-type]


def create_sample_escrow(**overrides: object) -> EscrowInfo:
    """Build a pending escrow hiring the sample agent, with optional overrides."""
    fields: dict[str, object] = {
        "escrow_id": "0x" + "e5" * 32,
        "job_title": "Market research",
        "client": SAMPLE_CLIENT,
        "custodian": SAMPLE_CUSTODIAN,
        "job_description": "Summarize Q3 DeFi volumes",
        "job_category": "research",
        "duration": 7,
        "budget": 100_000_000,
        "current_balance": 100_000_000,
        "status": int(EscrowStatus.PENDING),
        "main_agent": SAMPLE_OWNER,
        "main_agent_price": 50_000_000,
        "main_agent_paid": False,
        "total_hired_agents": 1,
        "blob_id": None,
        "created_at": 1_700_000_100_000,
    }
    fields.update(overrides)
    return EscrowInfo(**fields)  # type: ignore[arg-type]


# ============================================================================
# Mock Client Fixtures
# ============================================================================


@pytest.fixture
def mock_client() -> Generator[MockAgentWaveClient, None, None]:
    """Provide a MockAgentWaveClient for testing."""
    client = MockAgentWaveClient()
    yield client
    client.reset()


# ============================================================================
# Record Fixtures
# ============================================================================


@pytest.fixture
def sample_agent_profile() -> AgentProfile:
    return create_sample_agent_profile()


@pytest.fixture
def sample_escrow() -> EscrowInfo:
    return create_sample_escrow()


@pytest.fixture
def sample_escrows() -> list[EscrowInfo]:
    """A pending escrow and a released one with an uploaded deliverable."""
    return [
        create_sample_escrow(),
        create_sample_escrow(
            escrow_id="0x" + "e6" * 32,
            job_title="Logo design",
            status=int(EscrowStatus.RELEASED),
            current_balance=0,
            main_agent_paid=True,
            blob_id="Xb3kq9Vw0pQ",
        ),
    ]


# ============================================================================
# Wire Fixtures
# ============================================================================


@pytest.fixture
def packed_profile_values(sample_agent_profile: AgentProfile) -> list[ReturnValue]:
    return profile_return_values(sample_agent_profile)


@pytest.fixture
def separated_profile_values(sample_agent_profile: AgentProfile) -> list[ReturnValue]:
    return profile_return_values(sample_agent_profile, separated=True, tagged=True)


@pytest.fixture
def profile_list_values(sample_agent_profile: AgentProfile) -> list[ReturnValue]:
    second = create_sample_agent_profile(
        owner="0x" + "cd" * 32, name="Bot2", capabilities=("design",), is_active=False
    )
    return [ReturnValue(encode_agent_profile_list([sample_agent_profile, second]))]


@pytest.fixture
def escrow_list_values(sample_escrows: list[EscrowInfo]) -> list[ReturnValue]:
    return [ReturnValue(encode_escrow_list(sample_escrows))]


@pytest.fixture
def profile_created_events() -> list[dict[str, Any]]:
    """AgentProfileCreated events, newest first, including a re-registration."""
    return [
        {"parsedJson": {"owner": "0x" + "cd" * 32, "name": "Bot2", "timestamp": "1700000200000"}},
        {"parsedJson": {"owner": SAMPLE_OWNER, "name": "Bot1 v2", "timestamp": 1_700_000_100_000}},
        {"parsedJson": {"owner": "0x" + "ef" * 32, "name": ""}},
        {"parsedJson": {"owner": SAMPLE_OWNER, "name": "Bot1", "timestamp": "1700000000000"}},
        {"type": "no parsedJson"},
    ]
