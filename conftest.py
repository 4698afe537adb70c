"""Root pytest configuration: enables the visualcheck fixtures for the test suite."""

pytest_plugins = ["visualcheck.pytest_plugin"]
