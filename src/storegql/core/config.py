r"""Client configuration and per-request options.

This module provides the long-lived ``ClientConfig`` owned by a client
and the ephemeral ``RequestOptions`` given to each call. Options shadow
the configuration but never mutate it: every call computes its effective
URL, headers and retry budget from the immutable configuration.
"""

from __future__ import annotations

__all__ = ["ClientConfig", "RequestOptions", "merge_headers"]

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from storegql.constants import DEFAULT_RETRIES
from storegql.core.validation import validate_retries

if TYPE_CHECKING:
    from collections.abc import Mapping


def merge_headers(
    headers: Mapping[str, str], overrides: Mapping[str, str] | None = None
) -> dict[str, str]:
    r"""Overlay header overrides on top of base headers.

    Header names keep their case but are compared case-insensitively, so
    an override for ``content-type`` replaces a base ``Content-Type``.

    Args:
        headers: The base headers.
        overrides: The header overrides. The override wins per key.

    Returns:
        A new dictionary with the merged headers.

    Example:
        ```pycon
        >>> from storegql.core.config import merge_headers
        >>> merge_headers({"Accept": "application/json", "X-A": "1"}, {"x-a": "2"})
        {'Accept': 'application/json', 'x-a': '2'}

        ```
    """
    if not overrides:
        return dict(headers)
    overridden = {name.lower() for name in overrides}
    merged = {name: value for name, value in headers.items() if name.lower() not in overridden}
    merged.update(overrides)
    return merged


@dataclass(frozen=True)
class ClientConfig:
    """Configuration of a GraphQL client.

    The configuration is immutable. The ``resolve_*`` methods derive the
    effective values of a call from its overrides.

    Args:
        url: The GraphQL endpoint URL.
        headers: The headers sent with every request.
        retries: The default retry budget, i.e. the number of retries after
            the initial attempt. Must be between ``MIN_RETRIES`` and
            ``MAX_RETRIES``.

    Raises:
        ConfigurationError: If ``retries`` is out of bounds.

    Example:
        ```pycon
        >>> from storegql.core.config import ClientConfig
        >>> config = ClientConfig(url="https://shop.example.com/api/2024-01/graphql.json")
        >>> config.retries
        0
        >>> config.resolve_retries(2)
        2
        >>> config.resolve_retries()
        0

        ```
    """

    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    retries: int = DEFAULT_RETRIES

    def __post_init__(self) -> None:
        validate_retries(self.retries)
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def resolve_url(self, url: str | None = None) -> str:
        """Return the URL of a request.

        Args:
            url: Optional URL override.

        Returns:
            The override if given, otherwise the configured URL.
        """
        return self.url if url is None else url

    def resolve_headers(self, headers: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return the headers of a request.

        Args:
            headers: Optional header overrides.

        Returns:
            The configured headers overlaid with the overrides.
        """
        return merge_headers(self.headers, headers)

    def resolve_retries(self, retries: int | None = None) -> int:
        """Return the retry budget of a request.

        Args:
            retries: Optional retry budget override.

        Returns:
            The override if given, otherwise the configured budget.

        Raises:
            ConfigurationError: If the override is out of bounds.
        """
        if retries is None:
            return self.retries
        validate_retries(retries)
        return retries


@dataclass(frozen=True)
class RequestOptions:
    """Per-call options of a GraphQL request.

    Args:
        variables: Optional variables of the operation.
        headers: Optional header overrides.
        url: Optional URL override.
        retries: Optional retry budget override.
    """

    variables: Mapping[str, Any] | None = None
    headers: Mapping[str, str] | None = None
    url: str | None = None
    retries: int | None = None
