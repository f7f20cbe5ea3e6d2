r"""Construction of the physical HTTP request of a GraphQL operation.

The request builder is a pure function of the client configuration, the
operation text and the per-call options. It performs no network I/O.
"""

from __future__ import annotations

__all__ = ["RequestDescriptor", "build_request", "serialize_body"]

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from storegql.constants import CLIENT
from storegql.core.config import RequestOptions
from storegql.exceptions import RequestEncodingError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from storegql.core.config import ClientConfig


@dataclass(frozen=True)
class RequestDescriptor:
    """Physical HTTP request sent by the transport executor.

    Attributes:
        url: The resolved URL.
        headers: The resolved headers.
        body: The serialized JSON body.
        method: The HTTP method, always ``"POST"`` for GraphQL operations.
    """

    url: str
    headers: Mapping[str, str]
    body: str
    method: str = "POST"

    def to_kwargs(self) -> dict[str, Any]:
        """Return the keyword arguments of the fetch callable.

        Returns:
            The ``url``, ``headers`` and ``content`` keyword arguments,
                as accepted by ``httpx.Client.post``.

        Example:
            ```pycon
            >>> from storegql.core.request_logic import RequestDescriptor
            >>> descriptor = RequestDescriptor(
            ...     url="https://shop.example.com/graphql.json", headers={}, body="{}"
            ... )
            >>> descriptor.to_kwargs()
            {'url': 'https://shop.example.com/graphql.json', 'headers': {}, 'content': '{}'}

            ```
        """
        return {"url": self.url, "headers": dict(self.headers), "content": self.body}


def serialize_body(operation: str, variables: Mapping[str, Any] | None = None) -> str:
    r"""Serialize the JSON body of a GraphQL operation.

    Args:
        operation: The GraphQL operation text.
        variables: Optional variables. The ``variables`` key is omitted
            when not given.

    Returns:
        The JSON body.

    Raises:
        RequestEncodingError: If the variables cannot be encoded as JSON.

    Example:
        ```pycon
        >>> from storegql.core.request_logic import serialize_body
        >>> serialize_body("{ shop { name } }")
        '{"query": "{ shop { name } }"}'
        >>> serialize_body("query ($id: ID!) { node(id: $id) { id } }", {"id": "1"})
        '{"query": "query ($id: ID!) { node(id: $id) { id } }", "variables": {"id": "1"}}'

        ```
    """
    body: dict[str, Any] = {"query": operation}
    if variables is not None:
        body["variables"] = dict(variables)
    try:
        return json.dumps(body)
    except (TypeError, ValueError) as exc:
        msg = f"{CLIENT}: the operation body cannot be encoded as JSON - {exc}"
        raise RequestEncodingError(msg) from exc


def build_request(
    config: ClientConfig, operation: str, options: RequestOptions | None = None
) -> tuple[RequestDescriptor, int]:
    r"""Build the physical request and the retry budget of a call.

    Args:
        config: The client configuration.
        operation: The GraphQL operation text.
        options: Optional per-call options overriding the configuration.

    Returns:
        A tuple with the request descriptor and the effective retry budget.

    Raises:
        ConfigurationError: If the retry budget override is out of bounds.
        RequestEncodingError: If the variables cannot be encoded as JSON.

    Example:
        ```pycon
        >>> from storegql.core import ClientConfig, RequestOptions, build_request
        >>> config = ClientConfig(
        ...     url="https://shop.example.com/graphql.json",
        ...     headers={"Accept": "application/json"},
        ...     retries=1,
        ... )
        >>> descriptor, retries = build_request(config, "{ shop { name } }", RequestOptions(retries=3))
        >>> descriptor.url
        'https://shop.example.com/graphql.json'
        >>> retries
        3

        ```
    """
    if options is None:
        options = RequestOptions()
    retries = config.resolve_retries(options.retries)
    return (
        RequestDescriptor(
            url=config.resolve_url(options.url),
            headers=config.resolve_headers(options.headers),
            body=serialize_body(operation, options.variables),
        ),
        retries,
    )
