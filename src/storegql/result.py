r"""Normalized result of a GraphQL request."""

from __future__ import annotations

__all__ = ["GraphQLResult", "ResponseErrors"]

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ResponseErrors:
    """Error part of a GraphQL result.

    Attributes:
        message: The error description.
        network_status_code: The HTTP status code, if a response was
            received.
        graphql_errors: The raw ``errors`` list returned by the API, if any.
    """

    message: str
    network_status_code: int | None = None
    graphql_errors: list[Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert the errors to the wire-like format.

        Returns:
            A dictionary where missing values are omitted.
        """
        errors: dict[str, Any] = {}
        if self.network_status_code is not None:
            errors["networkStatusCode"] = self.network_status_code
        errors["message"] = self.message
        if self.graphql_errors is not None:
            errors["graphQLErrors"] = self.graphql_errors
        return errors


@dataclass(frozen=True)
class GraphQLResult:
    r"""Normalized result of a GraphQL request.

    A result can carry partial ``data`` together with ``errors``: the
    presence of errors never discards the data.

    Attributes:
        data: The ``data`` object returned by the API, if any.
        extensions: The ``extensions`` object returned by the API, if any.
        errors: The error part of the result, ``None`` on success.

    Example:
        ```pycon
        >>> from storegql.result import GraphQLResult, ResponseErrors
        >>> result = GraphQLResult(data={"shop": {"name": "Snowdevil"}})
        >>> result.ok
        True
        >>> result = GraphQLResult(errors=ResponseErrors("Not Found", network_status_code=404))
        >>> result.to_dict()
        {'errors': {'networkStatusCode': 404, 'message': 'Not Found'}}

        ```
    """

    data: Any = None
    extensions: Any = None
    errors: ResponseErrors | None = None

    @property
    def ok(self) -> bool:
        """Indicate if the result has no error."""
        return self.errors is None

    def to_dict(self) -> dict[str, Any]:
        """Convert the result to the wire-like format.

        Returns:
            A dictionary with the ``data``, ``extensions`` and ``errors``
                keys, where missing values are omitted.
        """
        result: dict[str, Any] = {}
        if self.data is not None:
            result["data"] = self.data
        if self.extensions is not None:
            result["extensions"] = self.extensions
        if self.errors is not None:
            result["errors"] = self.errors.to_dict()
        return result
