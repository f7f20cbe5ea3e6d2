r"""Synchronous GraphQL client.

This module provides the GraphQLClient class that sends GraphQL
operations over HTTP with a shared configuration, automatic retries on
transient failures and normalized results.
"""

from __future__ import annotations

__all__ = ["GraphQLClient"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from storegql.constants import DEFAULT_TIMEOUT
from storegql.core.config import RequestOptions
from storegql.core.request_logic import build_request
from storegql.core.response_logic import classify_response
from storegql.events import setup_sink
from storegql.exceptions import RequestEncodingError, TransportError
from storegql.result import GraphQLResult, ResponseErrors
from storegql.transport import TransportExecutor

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType
    from typing import Self

    from storegql.core.config import ClientConfig
    from storegql.events import BaseLogSink, LogEvent

logger: logging.Logger = logging.getLogger(__name__)


class GraphQLClient:
    r"""Synchronous client sending GraphQL operations over HTTP.

    The client owns an immutable ``ClientConfig``. Each call can override
    the variables, headers, URL and retry budget without changing the
    configuration, so one client can safely serve independent calls.

    Two methods are available:

    - ``fetch`` returns the raw ``httpx.Response`` and raises
      ``TransportError`` when the network keeps failing
    - ``request`` returns a normalized ``GraphQLResult`` and never raises
      for per-request failures

    When no ``httpx.Client`` is given, the client creates one and closes it
    on ``close`` or when leaving the ``with`` block. A given client is
    never closed.

    Args:
        config: The client configuration.
        client: Optional httpx.Client used to send the requests.
        fetch: Optional callable replacing ``client.post``. It receives the
            ``url``, ``headers`` and ``content`` keyword arguments.
        logger: Optional log sink, or callable, receiving the events.

    Example:
        ```pycon
        >>> from storegql import GraphQLClient
        >>> from storegql.core import ClientConfig
        >>> config = ClientConfig(
        ...     url="https://shop.example.com/api/2024-01/graphql.json",
        ...     headers={"Content-Type": "application/json"},
        ...     retries=2,
        ... )
        >>> with GraphQLClient(config=config) as client:  # doctest: +SKIP
        ...     result = client.request(
        ...         "query ($id: ID!) { product(id: $id) { title } }",
        ...         variables={"id": "gid://shopify/Product/1"},
        ...     )
        ...

        ```
    """

    def __init__(
        self,
        *,
        config: ClientConfig,
        client: httpx.Client | None = None,
        fetch: Callable[..., httpx.Response] | None = None,
        logger: BaseLogSink | Callable[[LogEvent], None] | None = None,
    ) -> None:
        self._config = config
        self._owns_client = client is None
        self._client: httpx.Client = client or httpx.Client(timeout=DEFAULT_TIMEOUT)
        self._sink = setup_sink(logger)
        self._executor = TransportExecutor(fetch or self._client.post, sink=self._sink)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(url={self._config.url!r}, retries={self._config.retries})"

    @property
    def config(self) -> ClientConfig:
        """The client configuration."""
        return self._config

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
        if self._owns_client:
            self._client.close()

    def fetch(
        self,
        operation: str,
        *,
        variables: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        url: str | None = None,
        retries: int | None = None,
    ) -> httpx.Response:
        r"""Send a GraphQL operation and return the raw HTTP response.

        Args:
            operation: The GraphQL operation text.
            variables: Optional variables of the operation.
            headers: Optional header overrides.
            url: Optional URL override.
            retries: Optional retry budget override.

        Returns:
            The last received response, whatever its status code.

        Raises:
            ConfigurationError: If the retry budget override is invalid.
            RequestEncodingError: If the variables cannot be encoded as JSON.
            TransportError: If the physical call kept failing.
        """
        request, max_retries = build_request(
            self._config,
            operation,
            RequestOptions(variables=variables, headers=headers, url=url, retries=retries),
        )
        return self._executor.execute(request, max_retries=max_retries)

    def request(
        self,
        operation: str,
        *,
        variables: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        url: str | None = None,
        retries: int | None = None,
    ) -> GraphQLResult:
        r"""Send a GraphQL operation and return the normalized result.

        Args:
            operation: The GraphQL operation text.
            variables: Optional variables of the operation.
            headers: Optional header overrides.
            url: Optional URL override.
            retries: Optional retry budget override.

        Returns:
            The normalized result. Network, encoding and response failures
                are reported in its ``errors``.

        Raises:
            ConfigurationError: If the retry budget override is invalid.

        Example:
            ```pycon
            >>> from storegql import GraphQLClient
            >>> from storegql.core import ClientConfig
            >>> with GraphQLClient(
            ...     config=ClientConfig(url="https://shop.example.com/api/2024-01/graphql.json")
            ... ) as client:  # doctest: +SKIP
            ...     result = client.request("{ shop { name } }")
            ...     if result.errors is not None:
            ...         print(result.errors.message)
            ...

            ```
        """
        try:
            response = self.fetch(
                operation, variables=variables, headers=headers, url=url, retries=retries
            )
        except (RequestEncodingError, TransportError) as exc:
            logger.debug(f"GraphQL request failed: {exc}")
            return GraphQLResult(errors=ResponseErrors(message=str(exc)))
        return classify_response(response)
