"""
Shared fixtures for integration tests.
"""

import pytest


@pytest.fixture
def or_cases():
    """Truth table of the OR function: (inputs, expected output)."""
    return [({"a": 0.0, "b": 0.0}, 0.0),
            ({"a": 0.0, "b": 1.0}, 1.0),
            ({"a": 1.0, "b": 0.0}, 1.0),
            ({"a": 1.0, "b": 1.0}, 1.0)]
