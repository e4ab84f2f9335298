"""
Request cancellation.

An ``AbortController`` owns an ``AbortSignal``. The signal is bound to a
request with ``HTTPClient.abort_signal()`` and forwarded to the transport,
which races the in-flight call against it.

Example:
    >>> controller = create_abort_controller()
    >>> task = asyncio.create_task(
    ...     HTTPClient("objects").abort_signal(controller.signal).invoke()
    ... )
    >>> controller.abort()
    >>> await task  # raises CanceledError (unless the error handler recovers)
"""

import asyncio
from typing import Any, Awaitable, Optional, TypeVar

from .exceptions import CanceledError

T = TypeVar("T")


class AbortSignal:
    """
    Cancellation flag.

    The asyncio.Event is created on first ``wait()``, inside the running
    loop, so a controller may be built before the loop starts.
    """

    def __init__(self):
        self._aborted = False
        self._event: Optional[asyncio.Event] = None
        self.reason: Any = None

    @property
    def aborted(self) -> bool:
        return self._aborted

    async def wait(self) -> None:
        if self._aborted:
            return
        if self._event is None:
            self._event = asyncio.Event()
        await self._event.wait()

    def _abort(self, reason: Any) -> None:
        if self._aborted:
            return
        self._aborted = True
        self.reason = reason
        if self._event is not None:
            self._event.set()


class AbortController:
    """Controller that triggers its signal."""

    def __init__(self):
        self.signal = AbortSignal()

    def abort(self, reason: Any = None) -> None:
        """Abort the bound request(s). Calling again has no effect."""
        self.signal._abort(reason)


def create_abort_controller() -> AbortController:
    return AbortController()


async def race_with_signal(
    awaitable: Awaitable[T],
    signal: Optional[AbortSignal],
    url: Optional[str] = None,
    request: Any = None,
) -> T:
    """
    Await ``awaitable`` unless ``signal`` fires first.

    Raises:
        CanceledError: The signal was aborted before or during the call
    """
    if signal is None:
        return await awaitable

    if signal.aborted:
        # Close an unstarted coroutine so it is not reported as never awaited
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise CanceledError(url=url, request=request, reason=signal.reason)

    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(signal.wait())

    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        waiter.cancel()
        raise

    if task.done():
        waiter.cancel()
        return task.result()

    if not signal.aborted:
        # The waiter failed without an abort, keep waiting for the work
        waiter.exception()
        return await task

    task.cancel()
    await asyncio.wait({task})
    if not task.cancelled():
        task.exception()
    raise CanceledError(url=url, request=request, reason=signal.reason)
