"""
Conftest for integration tests.

Automatically applies the 'integration' marker to all tests in this directory.
"""

import pytest

# Apply 'integration' marker to all tests in this directory
pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def reset_login_rate_limit():
    """The login limiter keeps in-memory counters across tests; start each test clean."""
    from routers.auth import limiter

    limiter.reset()
    yield
    limiter.reset()
