"""AgentWave SDK testing utilities.

Provides a reference BCS encoder, a mock client and fixtures for testing
applications that use the AgentWave SDK.
"""

from agentwave.testing.fixtures import create_sample_agent_profile, create_sample_escrow
from agentwave.testing.mock import MockAgentWaveClient, MockCall, MockResponse

__all__ = [
    # Mock client
    "MockAgentWaveClient",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_sample_agent_profile",
    "create_sample_escrow",
]
