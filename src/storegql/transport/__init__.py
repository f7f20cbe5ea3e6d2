r"""Transport executors sending the physical HTTP requests.

Public API:
    - TransportExecutor: Synchronous transport executor
    - AsyncTransportExecutor: Asynchronous transport executor
"""

from __future__ import annotations

__all__ = ["AsyncTransportExecutor", "TransportExecutor"]

from storegql.transport.executor import TransportExecutor
from storegql.transport.executor_async import AsyncTransportExecutor
