"""
Pytest plugin for AgentWave SDK testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest when this package is installed.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["agentwave.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from agentwave.testing.fixtures import (
    escrow_list_values,
    mock_client,
    packed_profile_values,
    profile_created_events,
    profile_list_values,
    sample_agent_profile,
    sample_escrow,
    sample_escrows,
    separated_profile_values,
)

__all__ = [
    "mock_client",
    "sample_agent_profile",
    "sample_escrow",
    "sample_escrows",
    "packed_profile_values",
    "separated_profile_values",
    "profile_list_values",
    "profile_created_events",
    "escrow_list_values",
]
