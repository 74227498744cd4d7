"""Cooperative cancellation for a publish in progress."""

import threading

from .errors import PublishCancelledError, PublishStep


class CancellationToken:
    """Flag checked before each remote step of a publish.

    Cancelling never interrupts a request already in flight; the per-request
    timeout bounds that wait. The next step then raises instead of starting.

    Example:
        >>> token = CancellationToken()
        >>> token.cancel()
        >>> token.raise_if_cancelled(PublishStep.PUBLISH)
        Traceback (most recent call last):
        ...
        PublishCancelledError: Publish cancelled before final publish
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, step: PublishStep) -> None:
        if self._event.is_set():
            raise PublishCancelledError(step)
