r"""Storefront API clients.

This module provides the clients of the Storefront API, a versioned
GraphQL API served by each store at
``https://<store domain>/api/<api version>/graphql.json``. They validate
the store domain, the API version and the access tokens, build the SDK
headers, and delegate the requests to a GraphQL client.

Example:
    ```pycon
    >>> from storegql import StorefrontClient
    >>> with StorefrontClient(
    ...     store_domain="shop.myshopify.com",
    ...     api_version="2024-01",
    ...     public_access_token="public-token",
    ...     retries=1,
    ... ) as client:  # doctest: +SKIP
    ...     result = client.request("{ shop { name } }")
    ...

    ```
"""

from __future__ import annotations

__all__ = ["AsyncStorefrontClient", "StorefrontClient", "StorefrontConfig", "create_storefront_config"]

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from storegql.client import GraphQLClient
from storegql.client_async import AsyncGraphQLClient
from storegql.constants import (
    ACCEPT_HEADER,
    CONTENT_TYPE_HEADER,
    DEFAULT_CLIENT_VERSION,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_RETRIES,
    DEFAULT_SDK_VARIANT,
    PRIVATE_ACCESS_TOKEN_HEADER,
    PUBLIC_ACCESS_TOKEN_HEADER,
    SDK_VARIANT_HEADER,
    SDK_VARIANT_SOURCE_HEADER,
    SDK_VERSION_HEADER,
)
from storegql.core.api_versions import get_current_supported_api_versions
from storegql.core.config import ClientConfig, merge_headers
from storegql.core.validation import (
    validate_api_version,
    validate_domain,
    validate_private_access_token_usage,
    validate_required_access_tokens,
)
from storegql.events import setup_sink

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping
    from datetime import date
    from types import TracebackType
    from typing import Self

    import httpx

    from storegql.events import BaseLogSink, LogEvent
    from storegql.result import GraphQLResult


@dataclass(frozen=True)
class StorefrontConfig:
    """Configuration of a Storefront API client.

    Use ``create_storefront_config`` to build a validated instance.

    Attributes:
        store_domain: The store origin, e.g. ``"https://shop.myshopify.com"``.
        api_version: The default API version.
        headers: The headers sent with every request.
        api_url: The GraphQL endpoint URL of the default API version.
        retries: The default retry budget.
        client_name: Optional name of the application using the client.
        public_access_token: The public access token, if used.
        private_access_token: The private access token, if used.
        supported_api_versions: The API versions supported when the client
            was created.
    """

    store_domain: str
    api_version: str
    headers: Mapping[str, str]
    api_url: str
    retries: int = DEFAULT_RETRIES
    client_name: str | None = None
    public_access_token: str | None = field(default=None, repr=False)
    private_access_token: str | None = field(default=None, repr=False)
    supported_api_versions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def format_api_url(self, api_version: str | None = None) -> str:
        """Return the GraphQL endpoint URL of an API version.

        Args:
            api_version: The API version. Defaults to the configured one.

        Returns:
            The GraphQL endpoint URL.
        """
        url_api_version = (api_version or self.api_version).strip()
        return f"{self.store_domain}/api/{url_api_version}/graphql.json"


def create_storefront_config(
    *,
    store_domain: str,
    api_version: str,
    public_access_token: str | None = None,
    private_access_token: str | None = None,
    client_name: str | None = None,
    retries: int = DEFAULT_RETRIES,
    sink: BaseLogSink | None = None,
    today: date | None = None,
) -> StorefrontConfig:
    r"""Validate the client options and build the Storefront
    configuration.

    Args:
        store_domain: The store domain, with or without scheme.
        api_version: The API version, e.g. ``"2024-01"``.
        public_access_token: The public access token.
        private_access_token: The private access token. Exactly one of
            the two tokens must be provided.
        client_name: Optional name of the application using the client,
            sent in the ``X-SDK-Variant-Source`` header.
        retries: The default retry budget.
        sink: Optional log sink receiving the unsupported API version
            event.
        today: The reference date of the supported API versions. Defaults
            to the current UTC date.

    Returns:
        The validated configuration.

    Raises:
        ConfigurationError: If the store domain, the API version or the
            access tokens are invalid.

    Example:
        ```pycon
        >>> from datetime import date
        >>> from storegql.storefront import create_storefront_config
        >>> config = create_storefront_config(
        ...     store_domain="shop.myshopify.com",
        ...     api_version="2024-01",
        ...     public_access_token="public-token",
        ...     today=date(2024, 2, 1),
        ... )
        >>> config.api_url
        'https://shop.myshopify.com/api/2024-01/graphql.json'

        ```
    """
    supported_api_versions = get_current_supported_api_versions(today)
    store_url = validate_domain(store_domain)
    validate_api_version(api_version, supported_api_versions, sink=sink)
    validate_required_access_tokens(public_access_token, private_access_token)
    validate_private_access_token_usage(private_access_token)

    headers = {
        CONTENT_TYPE_HEADER: DEFAULT_CONTENT_TYPE,
        ACCEPT_HEADER: DEFAULT_CONTENT_TYPE,
        SDK_VARIANT_HEADER: DEFAULT_SDK_VARIANT,
        SDK_VERSION_HEADER: DEFAULT_CLIENT_VERSION,
    }
    if client_name:
        headers[SDK_VARIANT_SOURCE_HEADER] = client_name
    if public_access_token:
        headers[PUBLIC_ACCESS_TOKEN_HEADER] = public_access_token
    else:
        headers[PRIVATE_ACCESS_TOKEN_HEADER] = private_access_token

    return StorefrontConfig(
        store_domain=store_url,
        api_version=api_version,
        headers=headers,
        api_url=f"{store_url}/api/{api_version.strip()}/graphql.json",
        retries=retries,
        client_name=client_name,
        public_access_token=public_access_token or None,
        private_access_token=None if public_access_token else private_access_token,
        supported_api_versions=tuple(supported_api_versions),
    )


class _StorefrontMixin:
    """Derivation of per-call URLs and headers shared by the sync and
    async Storefront clients."""

    _config: StorefrontConfig
    _sink: BaseLogSink | None

    @property
    def config(self) -> StorefrontConfig:
        """The Storefront configuration."""
        return self._config

    def get_headers(self, custom_headers: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return the headers of a request.

        The SDK and access token headers always win over custom headers
        with the same name.

        Args:
            custom_headers: Optional extra headers.

        Returns:
            The merged headers.
        """
        return merge_headers(custom_headers or {}, self._config.headers)

    def get_api_url(self, api_version: str | None = None) -> str:
        """Return the GraphQL endpoint URL of a request.

        Args:
            api_version: Optional API version overriding the configured
                one. It is validated like the configured one.

        Returns:
            The GraphQL endpoint URL.

        Raises:
            ConfigurationError: If the API version is invalid.
        """
        if not api_version:
            return self._config.api_url
        validate_api_version(api_version, self._config.supported_api_versions, sink=self._sink)
        return self._config.format_api_url(api_version)

    def _get_request_kwargs(
        self,
        variables: Mapping[str, Any] | None,
        api_version: str | None,
        custom_headers: Mapping[str, str] | None,
        retries: int | None,
    ) -> dict[str, Any]:
        return {
            "variables": variables,
            "headers": self.get_headers(custom_headers) if custom_headers else None,
            "url": self.get_api_url(api_version) if api_version else None,
            "retries": retries,
        }


class StorefrontClient(_StorefrontMixin):
    r"""Synchronous Storefront API client.

    Args:
        store_domain: The store domain, with or without scheme.
        api_version: The API version, e.g. ``"2024-01"``. A version outside
            of the supported window only triggers a warning.
        public_access_token: The public access token.
        private_access_token: The private access token. Exactly one of the
            two tokens must be provided.
        client_name: Optional name of the application using the client.
        retries: The default retry budget, between 0 and 3.
        client: Optional httpx.Client used to send the requests.
        fetch: Optional callable replacing ``client.post``.
        logger: Optional log sink, or callable, receiving the events.

    Raises:
        ConfigurationError: If any option is invalid.

    Example:
        ```pycon
        >>> from storegql import StorefrontClient
        >>> with StorefrontClient(
        ...     store_domain="shop.myshopify.com",
        ...     api_version="2024-01",
        ...     private_access_token="private-token",
        ... ) as client:  # doctest: +SKIP
        ...     result = client.request(
        ...         "query ($handle: String!) { product(handle: $handle) { title } }",
        ...         variables={"handle": "snowboard"},
        ...         api_version="2024-04",
        ...     )
        ...

        ```
    """

    def __init__(
        self,
        *,
        store_domain: str,
        api_version: str,
        public_access_token: str | None = None,
        private_access_token: str | None = None,
        client_name: str | None = None,
        retries: int = DEFAULT_RETRIES,
        client: httpx.Client | None = None,
        fetch: Callable[..., httpx.Response] | None = None,
        logger: BaseLogSink | Callable[[LogEvent], None] | None = None,
    ) -> None:
        self._sink = None if logger is None else setup_sink(logger)
        self._config = create_storefront_config(
            store_domain=store_domain,
            api_version=api_version,
            public_access_token=public_access_token,
            private_access_token=private_access_token,
            client_name=client_name,
            retries=retries,
            sink=self._sink,
        )
        self._graphql_client = GraphQLClient(
            config=ClientConfig(
                url=self._config.api_url, headers=self._config.headers, retries=retries
            ),
            client=client,
            fetch=fetch,
            logger=self._sink,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self._config!r})"

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying httpx client if this client created it."""
        self._graphql_client.close()

    def fetch(
        self,
        operation: str,
        *,
        variables: Mapping[str, Any] | None = None,
        api_version: str | None = None,
        custom_headers: Mapping[str, str] | None = None,
        retries: int | None = None,
    ) -> httpx.Response:
        r"""Send a GraphQL operation and return the raw HTTP response.

        Args:
            operation: The GraphQL operation text.
            variables: Optional variables of the operation.
            api_version: Optional API version of this request.
            custom_headers: Optional extra headers of this request.
            retries: Optional retry budget of this request.

        Returns:
            The last received response.

        Raises:
            ConfigurationError: If an option is invalid.
            RequestEncodingError: If the variables cannot be encoded as JSON.
            TransportError: If the physical call kept failing.
        """
        return self._graphql_client.fetch(
            operation, **self._get_request_kwargs(variables, api_version, custom_headers, retries)
        )

    def request(
        self,
        operation: str,
        *,
        variables: Mapping[str, Any] | None = None,
        api_version: str | None = None,
        custom_headers: Mapping[str, str] | None = None,
        retries: int | None = None,
    ) -> GraphQLResult:
        r"""Send a GraphQL operation and return the normalized result.

        Args:
            operation: The GraphQL operation text.
            variables: Optional variables of the operation.
            api_version: Optional API version of this request.
            custom_headers: Optional extra headers of this request.
            retries: Optional retry budget of this request.

        Returns:
            The normalized result.

        Raises:
            ConfigurationError: If an option is invalid.
        """
        return self._graphql_client.request(
            operation, **self._get_request_kwargs(variables, api_version, custom_headers, retries)
        )


class AsyncStorefrontClient(_StorefrontMixin):
    r"""Asynchronous Storefront API client.

    This class has the same options and behavior as ``StorefrontClient``,
    but sends the requests with an ``httpx.AsyncClient``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from storegql import AsyncStorefrontClient
        >>> async def main():
        ...     async with AsyncStorefrontClient(
        ...         store_domain="shop.myshopify.com",
        ...         api_version="2024-01",
        ...         public_access_token="public-token",
        ...     ) as client:
        ...         return await client.request("{ shop { name } }")
        ...
        >>> result = asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        *,
        store_domain: str,
        api_version: str,
        public_access_token: str | None = None,
        private_access_token: str | None = None,
        client_name: str | None = None,
        retries: int = DEFAULT_RETRIES,
        client: httpx.AsyncClient | None = None,
        fetch: Callable[..., Awaitable[httpx.Response]] | None = None,
        logger: BaseLogSink | Callable[[LogEvent], None] | None = None,
    ) -> None:
        self._sink = None if logger is None else setup_sink(logger)
        self._config = create_storefront_config(
            store_domain=store_domain,
            api_version=api_version,
            public_access_token=public_access_token,
            private_access_token=private_access_token,
            client_name=client_name,
            retries=retries,
            sink=self._sink,
        )
        self._graphql_client = AsyncGraphQLClient(
            config=ClientConfig(
                url=self._config.api_url, headers=self._config.headers, retries=retries
            ),
            client=client,
            fetch=fetch,
            logger=self._sink,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self._config!r})"

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client if this client created it."""
        await self._graphql_client.aclose()

    async def fetch(
        self,
        operation: str,
        *,
        variables: Mapping[str, Any] | None = None,
        api_version: str | None = None,
        custom_headers: Mapping[str, str] | None = None,
        retries: int | None = None,
    ) -> httpx.Response:
        r"""Send a GraphQL operation and return the raw HTTP response.

        See ``StorefrontClient.fetch``.
        """
        return await self._graphql_client.fetch(
            operation, **self._get_request_kwargs(variables, api_version, custom_headers, retries)
        )

    async def request(
        self,
        operation: str,
        *,
        variables: Mapping[str, Any] | None = None,
        api_version: str | None = None,
        custom_headers: Mapping[str, str] | None = None,
        retries: int | None = None,
    ) -> GraphQLResult:
        r"""Send a GraphQL operation and return the normalized result.

        See ``StorefrontClient.request``.
        """
        return await self._graphql_client.request(
            operation, **self._get_request_kwargs(variables, api_version, custom_headers, retries)
        )
