r"""Asynchronous GraphQL client.

This module provides the AsyncGraphQLClient class, the asyncio
counterpart of GraphQLClient.
"""

from __future__ import annotations

__all__ = ["AsyncGraphQLClient"]

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
from storegql.transport import AsyncTransportExecutor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping
    from types import TracebackType
    from typing import Self

    from storegql.core.config import ClientConfig
    from storegql.events import BaseLogSink, LogEvent

logger: logging.Logger = logging.getLogger(__name__)


class AsyncGraphQLClient:
    r"""Asynchronous client sending GraphQL operations over HTTP.

    This class has the same behavior as ``GraphQLClient``, but sends the
    requests with an ``httpx.AsyncClient`` and waits between retries with
    ``asyncio.sleep``. Independent calls can run concurrently on the same
    client.

    Args:
        config: The client configuration.
        client: Optional httpx.AsyncClient used to send the requests.
        fetch: Optional async callable replacing ``client.post``. It
            receives the ``url``, ``headers`` and ``content`` keyword
            arguments.
        logger: Optional log sink, or callable, receiving the events.

    Example:
        ```pycon
        >>> import asyncio
        >>> from storegql import AsyncGraphQLClient
        >>> from storegql.core import ClientConfig
        >>> async def main():
        ...     config = ClientConfig(url="https://shop.example.com/api/2024-01/graphql.json")
        ...     async with AsyncGraphQLClient(config=config) as client:
        ...         return await client.request("{ shop { name } }")
        ...
        >>> result = asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        *,
        config: ClientConfig,
        client: httpx.AsyncClient | None = None,
        fetch: Callable[..., Awaitable[httpx.Response]] | None = None,
        logger: BaseLogSink | Callable[[LogEvent], None] | None = None,
    ) -> None:
        self._config = config
        self._owns_client = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=DEFAULT_TIMEOUT)
        self._sink = setup_sink(logger)
        self._executor = AsyncTransportExecutor(fetch or self._client.post, sink=self._sink)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(url={self._config.url!r}, retries={self._config.retries})"

    @property
    def config(self) -> ClientConfig:
        """The client configuration."""
        return self._config

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
        if self._owns_client:
            await self._client.aclose()

    async def fetch(
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
        return await self._executor.execute(request, max_retries=max_retries)

    async def request(
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
        """
        try:
            response = await self.fetch(
                operation, variables=variables, headers=headers, url=url, retries=retries
            )
        except (RequestEncodingError, TransportError) as exc:
            logger.debug(f"GraphQL request failed: {exc}")
            return GraphQLResult(errors=ResponseErrors(message=str(exc)))
        return classify_response(response)
