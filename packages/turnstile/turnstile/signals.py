"""In-process notification bus with per-tick flush semantics."""
from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Handler = Callable[[T], None]


class TransitionBus(Generic[T]):
    """Queues notifications during a tick and delivers them on ``flush``.

    Handlers subscribed while a flush is running only see notifications
    published after that flush.
    """

    def __init__(self) -> None:
        self._handlers: list[Handler[T]] = []
        self._queue: list[T] = []

    def subscribe(self, handler: Handler[T]) -> Callable[[], None]:
        """Register ``handler``. Returns a callable that unsubscribes it."""
        self._handlers.append(handler)

        def unsubscribe() -> None:
            self.unsubscribe(handler)

        return unsubscribe

    def unsubscribe(self, handler: Handler[T]) -> None:
        try:
            self._handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, item: T) -> None:
        self._queue.append(item)

    def pending(self) -> int:
        return len(self._queue)

    def flush(self) -> int:
        """Deliver queued notifications in publish order. Returns the count."""
        batch = self._queue
        self._queue = []
        handlers = list(self._handlers)
        for item in batch:
            for handler in handlers:
                handler(item)
        return len(batch)

    def clear(self) -> None:
        """Drop queued notifications and every subscriber."""
        self._queue.clear()
        self._handlers.clear()
