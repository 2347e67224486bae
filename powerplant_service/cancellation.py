"""
Client disconnect handling.

ASGI servers keep running a handler after its client has gone away. For
handlers waiting on the database this means the query runs to completion
for nobody. run_until_disconnected races the pending call against the
connection state and cancels the call, which makes the driver abort the
query, as soon as the client disconnects.
"""

import asyncio
from typing import Awaitable, TypeVar

import structlog
from starlette.requests import Request

from .domain.exceptions import RequestCancelledException

logger = structlog.get_logger(__name__)

T = TypeVar("T")


async def run_until_disconnected(
    request: Request,
    awaitable: Awaitable[T],
    operation: str,
    poll_interval: float = 0.1,
) -> T:
    """
    Await a call, cancelling it if the client disconnects first.

    Args:
        request: Incoming request whose connection is watched
        awaitable: The pending repository/service call
        operation: Name used in logs and the raised exception
        poll_interval: Seconds between connection checks

    Returns:
        The call's result

    Raises:
        RequestCancelledException: If the client disconnected before the call finished
    """
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
                logger.info("Client disconnected, call cancelled", operation=operation)
                raise RequestCancelledException(operation)
    finally:
        if not task.done():
            task.cancel()
