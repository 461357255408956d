"""Observable values for publishing session state to a display layer.

Each field of the session view state is an ``ObservableValue``. The session
writes, the display layer reads: either by polling ``value``, registering a
callback with ``subscribe``, or iterating ``updates()``.
"""

import asyncio
from typing import AsyncIterator, Callable, Generic, TypeVar

T = TypeVar("T")


class ObservableValue(Generic[T]):
    """Holds a current value and notifies subscribers when it changes."""

    def __init__(self, initial: T):
        self._value = initial
        self._callbacks: list[Callable[[T], None]] = []
        self._queues: list[asyncio.Queue] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Replace the current value, notifying subscribers if it changed."""
        if value == self._value:
            return
        self._value = value
        for callback in list(self._callbacks):
            callback(value)
        for queue in self._queues:
            queue.put_nowait(value)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register a change callback. Returns a function that unregisters it."""
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    async def updates(self) -> AsyncIterator[T]:
        """Yield the current value, then every subsequent change."""
        queue: asyncio.Queue = asyncio.Queue()
        self._queues.append(queue)
        try:
            yield self._value
            while True:
                yield await queue.get()
        finally:
            self._queues.remove(queue)

    def __repr__(self) -> str:
        return f"ObservableValue({self._value!r})"
