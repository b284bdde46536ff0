"""One-way output channel from the engine to the native driver."""

from abc import ABC, abstractmethod
from typing import Callable, List


class Sink(ABC):
    """Fire-and-forget message channel. Delivery order is preserved."""

    @abstractmethod
    def emit(self, message: str) -> None:
        """Deliver one message."""


class ListSink(Sink):
    """Append-only in-memory channel the driver reads after a call."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def emit(self, message: str) -> None:
        self.messages.append(message)

    def drain(self) -> List[str]:
        """Return everything emitted so far and start a fresh sequence."""
        messages, self.messages = self.messages, []
        return messages

    def __len__(self) -> int:
        return len(self.messages)


class CallbackSink(Sink):
    """Forwards each message to a callback supplied by the host."""

    def __init__(self, callback: Callable[[str], object]):
        self._callback = callback

    def emit(self, message: str) -> None:
        self._callback(message)
