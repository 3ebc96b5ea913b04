"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - config: Client configuration pointing at the in-process backend
    - backend_state: Mutable contents of the fake backend
    - gateway: Real Gateway wired to the fake backend through ASGITransport
    - mock_gateway: AsyncMock stand-in for controller unit tests
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport

from kbassist.api.gateway import Gateway
from kbassist.config import ClientConfig
from tests.fake_backend import BackendState, create_fake_backend


@pytest.fixture
def config() -> ClientConfig:
    """Return configuration for the in-process test backend.

    Returns:
        ClientConfig with a short timeout.
    """
    return ClientConfig(api_base="http://test", timeout_s=5.0)


@pytest.fixture
def backend_state() -> BackendState:
    """Fresh fake backend contents for each test."""
    return BackendState()


@pytest.fixture
async def gateway(config: ClientConfig, backend_state: BackendState) -> AsyncGenerator[Gateway, None]:
    """Create a gateway talking to the fake backend.

    Yields:
        Gateway whose requests are served in-process by FastAPI.
    """
    transport = ASGITransport(app=create_fake_backend(backend_state))
    async with Gateway(config, transport=transport) as gw:
        yield gw


@pytest.fixture
def mock_gateway() -> AsyncMock:
    """Gateway double with every endpoint as an AsyncMock."""
    mock = AsyncMock(spec=Gateway)
    mock.base_url = "http://test"
    return mock
