r"""Unit tests for the asynchronous GraphQL client."""

from __future__ import annotations

import json
from datetime import date
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from storegql import (
    AsyncGraphQLClient,
    ClientConfig,
    ConfigurationError,
    RequestEncodingError,
    TransportError,
)
from tests.helpers import API_URL, OPERATION, create_json_response

HEADERS = {"Content-Type": "application/json", "X-Shopify-Storefront-Access-Token": "token"}


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(url=API_URL, headers=HEADERS, retries=0)


@pytest.fixture
def client(config: ClientConfig, mock_async_client: httpx.AsyncClient) -> AsyncGraphQLClient:
    return AsyncGraphQLClient(config=config, client=mock_async_client)


########################################
#     Tests for AsyncGraphQLClient     #
########################################


def test_async_graphql_client_config(client: AsyncGraphQLClient, config: ClientConfig) -> None:
    assert client.config is config


@pytest.mark.asyncio
async def test_async_graphql_client_aclose_does_not_close_external_client(
    client: AsyncGraphQLClient, mock_async_client: httpx.AsyncClient
) -> None:
    await client.aclose()
    mock_async_client.aclose.assert_not_awaited()


@pytest.mark.asyncio
async def test_async_graphql_client_context_manager(config: ClientConfig) -> None:
    async with AsyncGraphQLClient(config=config) as client:
        assert not client._client.is_closed
    assert client._client.is_closed


@pytest.mark.asyncio
async def test_async_graphql_client_custom_fetch(
    config: ClientConfig, mock_response: httpx.Response
) -> None:
    fetch = AsyncMock(return_value=mock_response)
    async with AsyncGraphQLClient(config=config, fetch=fetch) as client:
        assert await client.fetch(OPERATION) is mock_response
    fetch.assert_awaited_once_with(
        url=API_URL, headers=HEADERS, content=json.dumps({"query": OPERATION})
    )


@pytest.mark.asyncio
async def test_async_graphql_client_fetch_header_override(
    client: AsyncGraphQLClient,
    mock_async_client: httpx.AsyncClient,
    mock_response: httpx.Response,
) -> None:
    mock_async_client.post.return_value = mock_response
    await client.fetch(OPERATION, headers={"X-Shopify-Storefront-Access-Token": "other"})
    assert mock_async_client.post.call_args.kwargs["headers"] == {
        "Content-Type": "application/json",
        "X-Shopify-Storefront-Access-Token": "other",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("retries", [-1, 4])
async def test_async_graphql_client_fetch_invalid_retries(
    client: AsyncGraphQLClient, mock_async_client: httpx.AsyncClient, retries: int
) -> None:
    with pytest.raises(ConfigurationError):
        await client.fetch(OPERATION, retries=retries)
    mock_async_client.post.assert_not_awaited()


@pytest.mark.asyncio
async def test_async_graphql_client_fetch_raises_transport_error(
    client: AsyncGraphQLClient, mock_async_client: httpx.AsyncClient
) -> None:
    mock_async_client.post.side_effect = httpx.ConnectError("connection refused")
    with pytest.raises(TransportError, match=r"connection refused$"):
        await client.fetch(OPERATION)


@pytest.mark.asyncio
async def test_async_graphql_client_request_success(
    client: AsyncGraphQLClient,
    mock_async_client: httpx.AsyncClient,
    mock_response: httpx.Response,
) -> None:
    mock_async_client.post.return_value = mock_response
    result = await client.request(OPERATION)
    assert result.ok
    assert result.data == {"shop": {"name": "Snowdevil"}}


@pytest.mark.asyncio
@pytest.mark.parametrize("retries", [0, 1, 2, 3])
async def test_async_graphql_client_request_always_503(
    client: AsyncGraphQLClient,
    mock_async_client: httpx.AsyncClient,
    mock_asleep: Mock,
    retries: int,
) -> None:
    mock_async_client.post.return_value = httpx.Response(503)
    result = await client.request(OPERATION, retries=retries)
    assert mock_async_client.post.await_count == retries + 1
    assert mock_asleep.call_count == retries
    assert result.errors.network_status_code == 503


@pytest.mark.asyncio
async def test_async_graphql_client_request_retry_then_success(
    client: AsyncGraphQLClient, mock_async_client: httpx.AsyncClient, mock_asleep: Mock
) -> None:
    mock_async_client.post.side_effect = [
        httpx.Response(429),
        create_json_response(200, {"data": {"shop": {"name": "Snowdevil"}}}),
    ]
    result = await client.request(OPERATION, retries=1)
    assert result.ok
    assert mock_async_client.post.await_count == 2
    mock_asleep.assert_called_once_with(1.0)


@pytest.mark.asyncio
async def test_async_graphql_client_request_transport_error(
    client: AsyncGraphQLClient, mock_async_client: httpx.AsyncClient, mock_asleep: Mock
) -> None:
    mock_async_client.post.side_effect = httpx.ReadTimeout("timed out")
    result = await client.request(OPERATION, retries=1)
    assert mock_async_client.post.await_count == 2
    assert result.data is None
    assert result.errors.message == (
        "Storefront API Client: Attempted maximum number of 1 network retries. "
        "Last message - timed out"
    )


@pytest.mark.asyncio
async def test_async_graphql_client_fetch_unencodable_variables(
    client: AsyncGraphQLClient, mock_async_client: httpx.AsyncClient
) -> None:
    with pytest.raises(RequestEncodingError, match=r"Object of type date"):
        await client.fetch(OPERATION, variables={"createdAt": date(2024, 1, 1)})
    mock_async_client.post.assert_not_awaited()


@pytest.mark.asyncio
async def test_async_graphql_client_request_unencodable_variables(
    client: AsyncGraphQLClient, mock_async_client: httpx.AsyncClient
) -> None:
    result = await client.request(OPERATION, variables={"createdAt": date(2024, 1, 1)})
    mock_async_client.post.assert_not_awaited()
    assert result.data is None
    assert result.errors.network_status_code is None
    assert "Object of type date is not JSON serializable" in result.errors.message
