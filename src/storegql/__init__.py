r"""storegql - GraphQL client for versioned store APIs.

This package provides clients sending GraphQL operations over HTTP to
a versioned store API. Built on top of the httpx library, it retries the
requests on network failures and transient overload statuses, and
normalizes every outcome into a single result shape so callers never
need exceptions for ordinary failures.

Key Features:
    - Automatic retry on network errors and on 429/503 statuses, with a
      fixed 1-second delay and a bounded retry budget (0 to 3)
    - Normalized results: non-OK statuses, unexpected content types,
      malformed bodies and GraphQL errors are reported as data
    - Per-request overrides of variables, headers, URL and retry budget
    - Storefront API clients with domain, API version and access token
      validation
    - Full async support
    - Structured log events for observability

Example:
    ```pycon
    >>> from storegql import StorefrontClient
    >>> with StorefrontClient(
    ...     store_domain="shop.myshopify.com",
    ...     api_version="2024-01",
    ...     public_access_token="public-token",
    ...     retries=2,
    ... ) as client:  # doctest: +SKIP
    ...     result = client.request("{ shop { name } }")
    ...     if result.ok:
    ...         print(result.data["shop"]["name"])
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncGraphQLClient",
    "AsyncStorefrontClient",
    "ClientConfig",
    "ConfigurationError",
    "GraphQLClient",
    "GraphQLResult",
    "RequestEncodingError",
    "ResponseErrors",
    "StoreGQLError",
    "StorefrontClient",
    "TransportError",
    "__version__",
]

from storegql.client import GraphQLClient
from storegql.client_async import AsyncGraphQLClient
from storegql.constants import DEFAULT_CLIENT_VERSION
from storegql.core.config import ClientConfig
from storegql.exceptions import (
    ConfigurationError,
    RequestEncodingError,
    StoreGQLError,
    TransportError,
)
from storegql.result import GraphQLResult, ResponseErrors
from storegql.storefront import AsyncStorefrontClient, StorefrontClient

__version__ = DEFAULT_CLIENT_VERSION
