r"""Log events and sinks for observability.

This module provides the observability hook of storegql. A client emits
structured events at well-defined points of a request:

- ``HTTP-Response``: after every physical HTTP attempt that returned a
  response, whatever its status code
- ``HTTP-Retry``: before each retry (after the fixed wait)
- ``Unsupported-API-Version``: when a Storefront client is configured with
  an API version outside of the currently supported window

The events are delivered to a log sink. Any callable accepting one event
can be used as a sink; ``LoggingSink`` forwards the events to the standard
``logging`` module.

Example:
    ```pycon
    >>> from storegql import GraphQLClient
    >>> from storegql.core import ClientConfig
    >>> def log_event(event):
    ...     print(event.type)
    ...
    >>> with GraphQLClient(
    ...     config=ClientConfig(url="https://shop.example.com/api/2024-01/graphql.json"),
    ...     logger=log_event,
    ... ) as client:  # doctest: +SKIP
    ...     result = client.request("{ shop { name } }")
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "BaseLogSink",
    "CallbackSink",
    "HttpResponseEvent",
    "HttpRetryEvent",
    "LogEvent",
    "LoggingSink",
    "NullSink",
    "UnsupportedApiVersionEvent",
    "emit_event",
    "setup_sink",
]

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Union

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from storegql.core.request_logic import RequestDescriptor

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponseEvent:
    """Event emitted after each physical HTTP attempt that returned a
    response.

    Attributes:
        request: The physical request that was sent.
        response: The raw HTTP response, whatever its status code.
    """

    type: ClassVar[str] = "HTTP-Response"

    request: RequestDescriptor
    response: httpx.Response


@dataclass(frozen=True)
class HttpRetryEvent:
    """Event emitted before each retry, after the fixed wait.

    Attributes:
        request: The physical request that is retried.
        last_response: The response of the failed attempt, or ``None``
            if the attempt raised an exception.
        retry_attempt: The number of the attempt that failed (1-indexed).
        max_retries: The retry budget of the call.
    """

    type: ClassVar[str] = "HTTP-Retry"

    request: RequestDescriptor
    last_response: httpx.Response | None
    retry_attempt: int
    max_retries: int


@dataclass(frozen=True)
class UnsupportedApiVersionEvent:
    """Event emitted when the requested API version is not in the
    supported window.

    Attributes:
        api_version: The requested API version.
        supported_api_versions: The currently supported API versions.
    """

    type: ClassVar[str] = "Unsupported-API-Version"

    api_version: str
    supported_api_versions: tuple[str, ...]


LogEvent = Union[HttpResponseEvent, HttpRetryEvent, UnsupportedApiVersionEvent]


class BaseLogSink(ABC):
    """Abstract base class for log sinks.

    A log sink receives the events emitted by a client. It is invoked
    synchronously, so it should be fast.
    """

    @abstractmethod
    def emit(self, event: LogEvent) -> None:
        """Handle one event.

        Args:
            event: The event to handle.
        """


class NullSink(BaseLogSink):
    """Log sink that ignores all the events."""

    def emit(self, event: LogEvent) -> None:
        pass


class CallbackSink(BaseLogSink):
    """Log sink that forwards each event to a callable.

    Args:
        callback: The callable invoked with each event.

    Example:
        ```pycon
        >>> from storegql.events import CallbackSink, UnsupportedApiVersionEvent
        >>> events = []
        >>> sink = CallbackSink(events.append)
        >>> sink.emit(UnsupportedApiVersionEvent("2020-01", ("2024-01",)))
        >>> events[0].type
        'Unsupported-API-Version'

        ```
    """

    def __init__(self, callback: Callable[[LogEvent], None]) -> None:
        self.callback = callback

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(callback={self.callback!r})"

    def emit(self, event: LogEvent) -> None:
        self.callback(event)


class LoggingSink(BaseLogSink):
    """Log sink that writes each event to a ``logging.Logger``.

    The event fields are attached to the log record as ``extra`` fields so
    they are available to structured formatters.

    Args:
        logger: The logger to write to. Defaults to the ``storegql`` logger.
        level: The level of the log records.
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.DEBUG) -> None:
        self.logger = logger or logging.getLogger("storegql")
        self.level = level

    def emit(self, event: LogEvent) -> None:
        if isinstance(event, HttpResponseEvent):
            self.logger.log(
                self.level,
                f"{event.type}: POST {event.request.url} returned {event.response.status_code}",
                extra={
                    "event_type": event.type,
                    "url": event.request.url,
                    "status_code": event.response.status_code,
                },
            )
        elif isinstance(event, HttpRetryEvent):
            status_code = None if event.last_response is None else event.last_response.status_code
            self.logger.log(
                self.level,
                f"{event.type}: retrying POST {event.request.url} after attempt "
                f"{event.retry_attempt} (max retries: {event.max_retries})",
                extra={
                    "event_type": event.type,
                    "url": event.request.url,
                    "status_code": status_code,
                    "retry_attempt": event.retry_attempt,
                    "max_retries": event.max_retries,
                },
            )
        else:
            self.logger.log(
                self.level,
                f"{event.type}: {event.api_version} is not in "
                f"{', '.join(event.supported_api_versions)}",
                extra={
                    "event_type": event.type,
                    "api_version": event.api_version,
                },
            )


def setup_sink(sink: BaseLogSink | Callable[[LogEvent], None] | None) -> BaseLogSink:
    r"""Return a log sink built from the user-supplied logger.

    Args:
        sink: A log sink, a callable accepting one event, or ``None``.

    Returns:
        The sink itself, a ``CallbackSink`` wrapping the callable, or a
        ``NullSink`` when ``None`` is given.

    Example:
        ```pycon
        >>> from storegql.events import setup_sink
        >>> type(setup_sink(None)).__name__
        'NullSink'

        ```
    """
    if sink is None:
        return NullSink()
    if isinstance(sink, BaseLogSink):
        return sink
    return CallbackSink(sink)


def emit_event(sink: BaseLogSink, event: LogEvent) -> None:
    r"""Deliver an event to a sink without letting the sink break the
    caller.

    An exception raised by the sink is logged with its traceback and is
    not propagated.

    Args:
        sink: The log sink.
        event: The event to deliver.
    """
    try:
        sink.emit(event)
    except Exception:
        logger.exception(f"Log sink {sink!r} failed to handle a {event.type} event")
