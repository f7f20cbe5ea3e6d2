r"""Unit tests for the synchronous GraphQL client."""

from __future__ import annotations

import json
from datetime import date
from unittest.mock import Mock, call

import httpx
import pytest

from storegql import (
    ClientConfig,
    ConfigurationError,
    GraphQLClient,
    RequestEncodingError,
    TransportError,
)
from storegql.events import HttpResponseEvent
from tests.helpers import API_URL, OPERATION, create_json_response

HEADERS = {"Content-Type": "application/json", "X-Shopify-Storefront-Access-Token": "token"}


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(url=API_URL, headers=HEADERS, retries=0)


@pytest.fixture
def client(config: ClientConfig, mock_client: httpx.Client) -> GraphQLClient:
    return GraphQLClient(config=config, client=mock_client)


###################################
#     Tests for GraphQLClient     #
###################################


def test_graphql_client_config(client: GraphQLClient, config: ClientConfig) -> None:
    assert client.config is config


def test_graphql_client_repr(client: GraphQLClient) -> None:
    assert repr(client) == f"GraphQLClient(url='{API_URL}', retries=0)"


def test_graphql_client_close_does_not_close_external_client(
    client: GraphQLClient, mock_client: httpx.Client
) -> None:
    client.close()
    mock_client.close.assert_not_called()


def test_graphql_client_close_owned_client(config: ClientConfig) -> None:
    client = GraphQLClient(config=config)
    client.close()
    assert client._client.is_closed


def test_graphql_client_context_manager(config: ClientConfig) -> None:
    with GraphQLClient(config=config) as client:
        assert not client._client.is_closed
    assert client._client.is_closed


def test_graphql_client_custom_fetch(config: ClientConfig, mock_response: httpx.Response) -> None:
    fetch = Mock(return_value=mock_response)
    with GraphQLClient(config=config, fetch=fetch) as client:
        assert client.fetch(OPERATION) is mock_response
    fetch.assert_called_once_with(
        url=API_URL, headers=HEADERS, content=json.dumps({"query": OPERATION})
    )


def test_graphql_client_fetch(
    client: GraphQLClient, mock_client: httpx.Client, mock_response: httpx.Response
) -> None:
    mock_client.post.return_value = mock_response
    assert client.fetch(OPERATION, variables={"first": 1}) is mock_response
    mock_client.post.assert_called_once_with(
        url=API_URL,
        headers=HEADERS,
        content=json.dumps({"query": OPERATION, "variables": {"first": 1}}),
    )


def test_graphql_client_fetch_header_override(
    client: GraphQLClient, mock_client: httpx.Client, mock_response: httpx.Response
) -> None:
    mock_client.post.return_value = mock_response
    client.fetch(OPERATION, headers={"x-shopify-storefront-access-token": "other"})
    assert mock_client.post.call_args.kwargs["headers"] == {
        "Content-Type": "application/json",
        "x-shopify-storefront-access-token": "other",
    }
    assert client.config.headers == HEADERS


def test_graphql_client_fetch_url_override(
    client: GraphQLClient, mock_client: httpx.Client, mock_response: httpx.Response
) -> None:
    url = "https://shop.myshopify.com/api/unstable/graphql.json"
    mock_client.post.return_value = mock_response
    client.fetch(OPERATION, url=url)
    assert mock_client.post.call_args.kwargs["url"] == url


@pytest.mark.parametrize("retries", [-1, 4])
def test_graphql_client_fetch_invalid_retries(
    client: GraphQLClient, mock_client: httpx.Client, retries: int
) -> None:
    with pytest.raises(ConfigurationError, match=r"The provided \"retries\" value"):
        client.fetch(OPERATION, retries=retries)
    mock_client.post.assert_not_called()


@pytest.mark.parametrize("retries", [0, 1, 2, 3])
def test_graphql_client_fetch_retries_override(
    client: GraphQLClient, mock_client: httpx.Client, mock_sleep: Mock, retries: int
) -> None:
    response = httpx.Response(503)
    mock_client.post.return_value = response
    assert client.fetch(OPERATION, retries=retries) is response
    assert mock_client.post.call_count == retries + 1
    assert mock_sleep.call_count == retries


def test_graphql_client_fetch_config_retries(
    mock_client: httpx.Client, mock_sleep: Mock, mock_response: httpx.Response
) -> None:
    mock_client.post.side_effect = [httpx.Response(429), mock_response]
    client = GraphQLClient(config=ClientConfig(url=API_URL, retries=1), client=mock_client)
    assert client.fetch(OPERATION) is mock_response
    assert mock_client.post.call_count == 2
    mock_sleep.assert_called_once_with(1.0)


def test_graphql_client_fetch_raises_transport_error(
    client: GraphQLClient, mock_client: httpx.Client
) -> None:
    mock_client.post.side_effect = httpx.ConnectError("connection refused")
    with pytest.raises(TransportError, match=r"^Storefront API Client: connection refused$"):
        client.fetch(OPERATION)


def test_graphql_client_fetch_logger(
    config: ClientConfig, mock_client: httpx.Client, mock_response: httpx.Response
) -> None:
    callback = Mock()
    mock_client.post.return_value = mock_response
    client = GraphQLClient(config=config, client=mock_client, logger=callback)
    client.fetch(OPERATION)
    assert callback.call_count == 1
    event = callback.call_args.args[0]
    assert isinstance(event, HttpResponseEvent)
    assert event.response is mock_response
    assert event.request.url == API_URL


def test_graphql_client_request_success(
    client: GraphQLClient, mock_client: httpx.Client, mock_response: httpx.Response
) -> None:
    mock_client.post.return_value = mock_response
    result = client.request(OPERATION)
    assert result.ok
    assert result.data == {"shop": {"name": "Snowdevil"}}


def test_graphql_client_request_graphql_errors(
    client: GraphQLClient, mock_client: httpx.Client
) -> None:
    mock_client.post.return_value = create_json_response(
        200, {"data": {"shop": None}, "errors": [{"message": "Throttled"}]}
    )
    result = client.request(OPERATION)
    assert result.data == {"shop": None}
    assert result.errors.network_status_code == 200
    assert result.errors.graphql_errors == [{"message": "Throttled"}]


@pytest.mark.parametrize("retries", [0, 1, 2, 3])
def test_graphql_client_request_always_503(
    client: GraphQLClient, mock_client: httpx.Client, mock_sleep: Mock, retries: int
) -> None:
    mock_client.post.return_value = httpx.Response(503)
    result = client.request(OPERATION, retries=retries)
    assert mock_client.post.call_count == retries + 1
    assert result.data is None
    assert result.errors.network_status_code == 503
    assert result.errors.message == "Service Unavailable"


def test_graphql_client_request_not_found_is_not_retried(
    client: GraphQLClient, mock_client: httpx.Client, mock_sleep: Mock
) -> None:
    mock_client.post.return_value = httpx.Response(404)
    result = client.request(OPERATION, retries=3)
    mock_client.post.assert_called_once()
    mock_sleep.assert_not_called()
    assert result.errors.network_status_code == 404


def test_graphql_client_request_transport_error(
    client: GraphQLClient, mock_client: httpx.Client, mock_sleep: Mock
) -> None:
    mock_client.post.side_effect = httpx.ConnectError("connection refused")
    result = client.request(OPERATION, retries=2)
    assert mock_client.post.call_count == 3
    assert mock_sleep.call_args_list == [call(1.0), call(1.0)]
    assert result.data is None
    assert result.errors.network_status_code is None
    assert result.errors.message == (
        "Storefront API Client: Attempted maximum number of 2 network retries. "
        "Last message - connection refused"
    )


def test_graphql_client_request_invalid_retries_raises(client: GraphQLClient) -> None:
    with pytest.raises(ConfigurationError):
        client.request(OPERATION, retries=4)


def test_graphql_client_fetch_unencodable_variables(
    client: GraphQLClient, mock_client: httpx.Client
) -> None:
    with pytest.raises(RequestEncodingError, match=r"Object of type date"):
        client.fetch(OPERATION, variables={"createdAt": date(2024, 1, 1)})
    mock_client.post.assert_not_called()


def test_graphql_client_request_unencodable_variables(
    client: GraphQLClient, mock_client: httpx.Client
) -> None:
    result = client.request(OPERATION, variables={"createdAt": date(2024, 1, 1)})
    mock_client.post.assert_not_called()
    assert result.data is None
    assert result.errors.network_status_code is None
    assert result.errors.message.startswith(
        "Storefront API Client: the operation body cannot be encoded as JSON - "
        "Object of type date is not JSON serializable"
    )
