r"""Validation utilities for client and request configuration.

This module provides the validation functions used when a client is
created and when a request overrides part of the client configuration.
All of them raise ``ConfigurationError`` on invalid input, except the API
version check which only warns about unsupported versions.
"""

from __future__ import annotations

__all__ = [
    "is_browser_like_runtime",
    "validate_api_version",
    "validate_domain",
    "validate_private_access_token_usage",
    "validate_required_access_tokens",
    "validate_retries",
]

import logging
import sys
from typing import TYPE_CHECKING, Any

import httpx

from storegql.constants import CLIENT, MAX_RETRIES, MIN_RETRIES
from storegql.events import UnsupportedApiVersionEvent, emit_event
from storegql.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from storegql.events import BaseLogSink

logger: logging.Logger = logging.getLogger(__name__)


def validate_retries(retries: Any) -> None:
    """Validate a retry budget.

    Args:
        retries: The number of retries, not counting the initial attempt.
            Must be an integer between ``MIN_RETRIES`` and ``MAX_RETRIES``.

    Raises:
        ConfigurationError: If ``retries`` is not an integer or is out of
            bounds.

    Example:
        ```pycon
        >>> from storegql.core.validation import validate_retries
        >>> validate_retries(0)
        >>> validate_retries(3)
        >>> validate_retries(4)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        storegql.exceptions.ConfigurationError: Storefront API Client: The provided "retries" value (4) is invalid - it cannot be less than 0 or greater than 3

        ```
    """
    if (
        isinstance(retries, bool)
        or not isinstance(retries, int)
        or retries < MIN_RETRIES
        or retries > MAX_RETRIES
    ):
        msg = (
            f'{CLIENT}: The provided "retries" value ({retries}) is invalid - it cannot be '
            f"less than {MIN_RETRIES} or greater than {MAX_RETRIES}"
        )
        raise ConfigurationError(msg)


def validate_domain(store_domain: Any) -> str:
    """Validate a store domain and return the store origin.

    The scheme is optional and is always forced to ``https``.

    Args:
        store_domain: The store domain, e.g. ``"shop.myshopify.com"``.

    Returns:
        The store origin, e.g. ``"https://shop.myshopify.com"``.

    Raises:
        ConfigurationError: If the store domain is empty, is not a string
            or cannot be parsed as a URL.

    Example:
        ```pycon
        >>> from storegql.core.validation import validate_domain
        >>> validate_domain("shop.myshopify.com")
        'https://shop.myshopify.com'
        >>> validate_domain("http://shop.myshopify.com/admin")
        'https://shop.myshopify.com'

        ```
    """
    msg = f'{CLIENT}: a valid store domain ("{store_domain}") must be provided'
    if not store_domain or not isinstance(store_domain, str):
        raise ConfigurationError(msg)

    trimmed_domain = store_domain.strip()
    if not trimmed_domain.startswith("http"):
        trimmed_domain = f"https://{trimmed_domain}"
    try:
        url = httpx.URL(trimmed_domain)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(msg) from exc
    if not url.host:
        raise ConfigurationError(msg)
    return f"https://{url.netloc.decode('ascii')}"


def validate_api_version(
    api_version: Any,
    supported_api_versions: Sequence[str],
    sink: BaseLogSink | None = None,
) -> None:
    """Validate an API version against the supported versions.

    A version outside of the supported window is not an error: an
    ``UnsupportedApiVersionEvent`` is emitted through ``sink`` when one is
    given, otherwise a warning is logged.

    Args:
        api_version: The API version, e.g. ``"2024-01"``.
        supported_api_versions: The currently supported API versions.
        sink: Optional log sink receiving the unsupported version event.

    Raises:
        ConfigurationError: If the API version is empty or not a string.

    Example:
        ```pycon
        >>> from storegql.core.validation import validate_api_version
        >>> validate_api_version("2024-01", ["2023-10", "2024-01", "unstable"])

        ```
    """
    version_error = f'{CLIENT}: the provided apiVersion ("{api_version}")'
    supported_version = f"Current supported API versions: {', '.join(supported_api_versions)}"
    if not api_version or not isinstance(api_version, str):
        msg = f"{version_error} is invalid. {supported_version}"
        raise ConfigurationError(msg)

    if api_version.strip() in supported_api_versions:
        return
    if sink is not None:
        emit_event(
            sink,
            UnsupportedApiVersionEvent(
                api_version=api_version,
                supported_api_versions=tuple(supported_api_versions),
            ),
        )
    else:
        logger.warning(f"{version_error} is deprecated or not supported. {supported_version}")


def validate_required_access_tokens(
    public_access_token: str | None, private_access_token: str | None
) -> None:
    """Validate that exactly one access token is provided.

    Args:
        public_access_token: The public Storefront API access token.
        private_access_token: The private Storefront API access token.

    Raises:
        ConfigurationError: If no token or both tokens are provided.

    Example:
        ```pycon
        >>> from storegql.core.validation import validate_required_access_tokens
        >>> validate_required_access_tokens("public-token", None)

        ```
    """
    if not public_access_token and not private_access_token:
        msg = f"{CLIENT}: a public or private access token must be provided"
        raise ConfigurationError(msg)
    if public_access_token and private_access_token:
        msg = f"{CLIENT}: only provide either a public or private access token"
        raise ConfigurationError(msg)


def is_browser_like_runtime() -> bool:
    """Indicate if the interpreter runs in a browser-like environment.

    Returns:
        ``True`` when running on WebAssembly (e.g. Pyodide), otherwise
            ``False``.
    """
    return sys.platform == "emscripten"


def validate_private_access_token_usage(private_access_token: str | None) -> None:
    """Validate that a private access token is only used server-side.

    Args:
        private_access_token: The private Storefront API access token.

    Raises:
        ConfigurationError: If a private token is provided in a
            browser-like runtime.
    """
    if private_access_token and is_browser_like_runtime():
        msg = (
            f"{CLIENT}: private access tokens and headers should only be used in a "
            "server-to-server implementation. Use the public API access token in "
            "nonserver environments."
        )
        raise ConfigurationError(msg)
