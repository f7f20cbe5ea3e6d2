r"""Synchronous transport executor for GraphQL requests.

This module provides the TransportExecutor class that sends the physical
HTTP request of a GraphQL operation and retries it on network failures
and transient overload statuses.
"""

from __future__ import annotations

__all__ = ["TransportExecutor"]

import logging
import time
from typing import TYPE_CHECKING

from storegql.constants import RETRY_WAIT_TIME
from storegql.events import HttpResponseEvent, HttpRetryEvent, emit_event, setup_sink
from storegql.transport.core import create_transport_error, is_retriable_response

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from storegql.core.request_logic import RequestDescriptor
    from storegql.events import BaseLogSink

logger: logging.Logger = logging.getLogger(__name__)


class TransportExecutor:
    """Sends physical HTTP requests with a fixed-delay retry policy.

    A request is retried when the fetch callable raises an exception or
    when the response status is 429 or 503, as long as the retry budget is
    not spent. Retries wait ``RETRY_WAIT_TIME`` seconds, without backoff or
    jitter. Any other response, including 4xx and 5xx statuses, is returned
    as-is: the payload is never inspected.

    Attributes:
        fetch: The callable sending one physical request. It receives the
            ``url``, ``headers`` and ``content`` keyword arguments and
            returns an ``httpx.Response``.
        sink: The log sink receiving the response and retry events.

    Example:
        ```pycon
        >>> import httpx
        >>> from storegql.core.request_logic import RequestDescriptor
        >>> from storegql.transport import TransportExecutor
        >>> with httpx.Client() as client:  # doctest: +SKIP
        ...     executor = TransportExecutor(client.post)
        ...     response = executor.execute(
        ...         RequestDescriptor(
        ...             url="https://shop.example.com/api/2024-01/graphql.json",
        ...             headers={"Content-Type": "application/json"},
        ...             body='{"query": "{ shop { name } }"}',
        ...         ),
        ...         max_retries=2,
        ...     )
        ...

        ```
    """

    def __init__(
        self, fetch: Callable[..., httpx.Response], sink: BaseLogSink | None = None
    ) -> None:
        self.fetch = fetch
        self.sink = setup_sink(sink)

    def execute(self, request: RequestDescriptor, max_retries: int) -> httpx.Response:
        """Send a request, retrying it while the policy allows.

        Args:
            request: The physical request to send.
            max_retries: The retry budget, i.e. the number of retries after
                the initial attempt.

        Returns:
            The last received response.

        Raises:
            TransportError: If the last attempt raised an exception.
        """
        max_tries = max_retries + 1
        attempt = 1
        while True:
            response: httpx.Response | None = None
            try:
                response = self.fetch(**request.to_kwargs())
            except Exception as exc:
                logger.debug(
                    f"POST request to {request.url} raised {type(exc).__name__} on attempt "
                    f"{attempt}/{max_tries}: {exc}"
                )
                if attempt >= max_tries:
                    raise create_transport_error(
                        exc, url=request.url, attempts=attempt, max_retries=max_retries
                    ) from exc
            else:
                emit_event(self.sink, HttpResponseEvent(request=request, response=response))
                if not is_retriable_response(response) or attempt >= max_tries:
                    return response
                logger.debug(
                    f"POST request to {request.url} returned retriable status "
                    f"{response.status_code} on attempt {attempt}/{max_tries}"
                )

            logger.debug(f"Waiting {RETRY_WAIT_TIME:.2f}s before retry")
            time.sleep(RETRY_WAIT_TIME)
            emit_event(
                self.sink,
                HttpRetryEvent(
                    request=request,
                    last_response=response,
                    retry_attempt=attempt,
                    max_retries=max_retries,
                ),
            )
            attempt += 1
