"""
Cooperative cancellation token for cancellable async handlers.

A CancellationToken is handed to handlers declared as
``async def handle(self, event: E, cancellation_token: CancellationToken)``.
The dispatch function forwards the token unchanged; observing it is the
handler's responsibility.

Example:
    >>> token = CancellationToken()
    >>> await dispatch(event, token)
    >>> # From elsewhere:
    >>> token.cancel()
"""

import asyncio

from eventdispatch.exceptions import EventDispatchError


class OperationCancelledError(EventDispatchError):
    """Raised by ``CancellationToken.raise_if_cancelled`` once cancellation was requested."""

    pass


class CancellationToken:
    """
    Signal used to request cancellation of in-flight handler work.

    The token wraps an ``asyncio.Event`` so handlers can either poll
    ``is_cancelled`` or await ``wait()``.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @classmethod
    def none(cls) -> "CancellationToken":
        """Create a token that nobody else holds and therefore never gets cancelled."""
        return cls()

    @property
    def is_cancelled(self) -> bool:
        """True once ``cancel()`` has been called."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        self._event.set()

    async def wait(self) -> None:
        """Wait until cancellation is requested."""
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        """Raise OperationCancelledError if cancellation was requested."""
        if self.is_cancelled:
            raise OperationCancelledError("The operation was cancelled.")

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled})"


__all__ = [
    "CancellationToken",
    "OperationCancelledError",
]
