pytest_plugins = ["agentwave.testing.conftest"]
