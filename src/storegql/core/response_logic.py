r"""Classification of HTTP responses into normalized GraphQL results.

The classifier never raises: non-OK statuses, unexpected content types,
malformed bodies and GraphQL-level errors are all represented by the
error part of a ``GraphQLResult``.
"""

from __future__ import annotations

__all__ = [
    "GQL_API_ERROR",
    "NO_DATA_OR_ERRORS_ERROR",
    "UNEXPECTED_CONTENT_TYPE_ERROR",
    "classify_response",
    "process_json_response",
]

import logging
from typing import TYPE_CHECKING

from storegql.constants import CLIENT, CONTENT_TYPES
from storegql.result import GraphQLResult, ResponseErrors

if TYPE_CHECKING:
    import httpx

logger: logging.Logger = logging.getLogger(__name__)

GQL_API_ERROR = (
    f"{CLIENT}: An error occurred while fetching from the API. "
    "Review 'graphQLErrors' for details."
)
NO_DATA_OR_ERRORS_ERROR = (
    f"{CLIENT}: An unknown error has occurred. "
    "The API did not return a data object or any errors in its response."
)
UNEXPECTED_CONTENT_TYPE_ERROR = f"{CLIENT}: Response returned unexpected Content-Type:"


def process_json_response(response: httpx.Response) -> GraphQLResult:
    """Build a result from a JSON GraphQL response.

    A body that is not a JSON object has neither ``data`` nor ``errors``.

    Args:
        response: The HTTP response with a JSON body.

    Returns:
        The result. It carries an error when the body has ``errors`` or no
            ``data``.

    Raises:
        ValueError: If the body is not valid JSON.
    """
    payload = response.json()
    if not isinstance(payload, dict):
        payload = {}
    data = payload.get("data")
    errors = payload.get("errors")
    extensions = payload.get("extensions")

    if errors is None and data is not None:
        return GraphQLResult(data=data, extensions=extensions)

    return GraphQLResult(
        data=data,
        extensions=extensions,
        errors=ResponseErrors(
            message=GQL_API_ERROR if errors is not None else NO_DATA_OR_ERRORS_ERROR,
            network_status_code=response.status_code,
            graphql_errors=errors,
        ),
    )


def classify_response(response: httpx.Response) -> GraphQLResult:
    r"""Normalize an HTTP response into a GraphQL result.

    The checks are evaluated in order:

    1. a non-OK status gives an error with the status code and reason
       phrase, without reading the body
    2. a content type other than JSON gives an error naming it
    3. the JSON body is processed by ``process_json_response``

    Any exception raised while classifying is converted into an error
    carrying the exception message.

    Args:
        response: The HTTP response to classify.

    Returns:
        The normalized result.

    Example:
        ```pycon
        >>> import httpx
        >>> from storegql.core import classify_response
        >>> classify_response(httpx.Response(200, json={"data": {"x": 1}}))
        GraphQLResult(data={'x': 1}, extensions=None, errors=None)

        ```
    """
    try:
        status_code = response.status_code
        if not response.is_success:
            logger.debug(f"Response has non-OK status {status_code}")
            return GraphQLResult(
                errors=ResponseErrors(
                    message=response.reason_phrase, network_status_code=status_code
                )
            )

        content_type = response.headers.get("content-type", "")
        if CONTENT_TYPES["json"] not in content_type:
            logger.debug(f"Response has unexpected content type {content_type!r}")
            return GraphQLResult(
                errors=ResponseErrors(
                    message=f"{UNEXPECTED_CONTENT_TYPE_ERROR} {content_type}",
                    network_status_code=status_code,
                )
            )

        return process_json_response(response)
    except Exception as exc:  # noqa: BLE001
        logger.debug(f"Failed to classify the response: {exc}")
        return GraphQLResult(errors=ResponseErrors(message=str(exc)))
