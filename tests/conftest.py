from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from storegql.events import BaseLogSink

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_client() -> httpx.Client:
    """Create a mock httpx.Client for testing."""
    return Mock(spec=httpx.Client)


@pytest.fixture
def mock_async_client() -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient for testing."""
    return Mock(spec=httpx.AsyncClient, post=AsyncMock(), aclose=AsyncMock())


@pytest.fixture
def mock_response() -> httpx.Response:
    """Create a successful GraphQL response for testing."""
    return httpx.Response(200, json={"data": {"shop": {"name": "Snowdevil"}}})


@pytest.fixture
def mock_sink() -> Mock:
    """Create a mock log sink collecting the emitted events."""
    return Mock(spec=BaseLogSink)
