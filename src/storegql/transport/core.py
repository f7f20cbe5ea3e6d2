r"""Shared logic of the sync and async transport executors."""

from __future__ import annotations

__all__ = ["create_transport_error", "get_error_message", "is_retriable_response"]

from typing import TYPE_CHECKING

from storegql.constants import CLIENT, RETRIABLE_STATUS_CODES
from storegql.exceptions import TransportError

if TYPE_CHECKING:
    import httpx


def is_retriable_response(response: httpx.Response) -> bool:
    """Indicate if a response signals a transient overload.

    Args:
        response: The HTTP response.

    Returns:
        ``True`` if the status code is in ``RETRIABLE_STATUS_CODES``.

    Example:
        ```pycon
        >>> import httpx
        >>> from storegql.transport.core import is_retriable_response
        >>> is_retriable_response(httpx.Response(503))
        True
        >>> is_retriable_response(httpx.Response(500))
        False

        ```
    """
    return response.status_code in RETRIABLE_STATUS_CODES


def get_error_message(error: BaseException) -> str:
    """Return the message of an exception.

    Args:
        error: The exception.

    Returns:
        The exception message, or its type name when the message is empty.
    """
    return str(error) or type(error).__name__


def create_transport_error(
    exc: BaseException, url: str, attempts: int, max_retries: int
) -> TransportError:
    """Create the error raised when the physical call cannot be retried.

    Args:
        exc: The innermost exception.
        url: The requested URL.
        attempts: The number of physical attempts made.
        max_retries: The retry budget of the call.

    Returns:
        The error. Its message ends with the innermost message.

    Example:
        ```pycon
        >>> from storegql.transport.core import create_transport_error
        >>> error = create_transport_error(
        ...     OSError("connection refused"), "https://shop.example.com", attempts=3, max_retries=2
        ... )
        >>> error.message
        'Storefront API Client: Attempted maximum number of 2 network retries. Last message - connection refused'

        ```
    """
    retries_note = (
        f" Attempted maximum number of {max_retries} network retries. Last message -"
        if max_retries > 0
        else ""
    )
    return TransportError(
        f"{CLIENT}:{retries_note} {get_error_message(exc)}",
        url=url,
        attempts=attempts,
        cause=exc,
    )
