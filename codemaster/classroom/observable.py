"""
ObservableValue - single-writer state holder with change notification.

Every write is delivered to every subscriber, in order. Consecutive writes are
never coalesced, so a subscriber sees each intermediate value of a compound
operation.
"""

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Subscriber = Callable[[T], None]


class ObservableValue(Generic[T]):
    """
    Observable value owned by a single writer.

    Readers use `value` and `subscribe`; only the owner calls `publish`.
    """

    def __init__(self, initial: T):
        self._value = initial
        self._subscribers: list[Subscriber] = []

    @property
    def value(self) -> T:
        return self._value

    def publish(self, value: T) -> None:
        """Replace the value and notify subscribers."""
        self._value = value
        for callback in list(self._subscribers):
            callback(value)

    def subscribe(self, callback: Subscriber, emit_current: bool = False) -> Callable[[], None]:
        """
        Register a callback for every future write.

        Args:
            callback: Called with the new value after each publish
            emit_current: Also call it immediately with the current value

        Returns:
            Function that removes the subscription
        """
        self._subscribers.append(callback)
        if emit_current:
            callback(self._value)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
