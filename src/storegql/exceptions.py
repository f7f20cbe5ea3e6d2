r"""Exceptions raised by the storegql package.

Configuration problems are always raised as exceptions. Unencodable
request bodies and exhausted transports are raised by ``fetch`` and
returned as the error part of a ``GraphQLResult`` by ``request``.
Response-shape problems (non-OK status, unexpected content type, GraphQL
errors) are never raised.
"""

from __future__ import annotations

__all__ = ["ConfigurationError", "RequestEncodingError", "StoreGQLError", "TransportError"]


class StoreGQLError(Exception):
    """Base class of all the errors raised by storegql."""


class ConfigurationError(StoreGQLError, ValueError):
    r"""Raised when a client or a request is configured with invalid
    values.

    Examples are an invalid store domain, a missing API version, a retry
    count outside the allowed bounds, or a missing/duplicated access token.

    Example:
        ```pycon
        >>> from storegql.exceptions import ConfigurationError
        >>> error = ConfigurationError("invalid retries")
        >>> isinstance(error, ValueError)
        True

        ```
    """


class RequestEncodingError(StoreGQLError):
    r"""Raised when the body of a GraphQL operation cannot be encoded as
    JSON, e.g. when a variable is a ``datetime.date``.

    Example:
        ```pycon
        >>> from storegql.exceptions import RequestEncodingError, StoreGQLError
        >>> error = RequestEncodingError("Object of type date is not JSON serializable")
        >>> isinstance(error, StoreGQLError)
        True

        ```
    """


class TransportError(StoreGQLError):
    r"""Raised when the physical HTTP call failed and no retry is left.

    Args:
        message: Human-readable error description. It always ends with the
            message of the innermost error.
        url: The URL that was requested.
        attempts: The number of physical attempts that were made.
        cause: The innermost exception, if any.

    Example:
        ```pycon
        >>> from storegql.exceptions import TransportError
        >>> error = TransportError(
        ...     "Storefront API Client: connection refused",
        ...     url="https://shop.example.com/api/2024-01/graphql.json",
        ...     attempts=1,
        ... )
        >>> error.attempts
        1

        ```
    """

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        attempts: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.attempts = attempts
        self.cause = cause

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(message={self.message!r}, url={self.url!r}, "
            f"attempts={self.attempts})"
        )
