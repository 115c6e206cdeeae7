"""Per-entity change notifications."""

from __future__ import annotations
from typing import Any, Callable


class Signal:
    """
    A notification channel owned by one entity.

    Listeners are called in connection order. Connecting the same callable
    twice registers it once.
    """

    def __init__(self) -> None:
        self._listeners: list[Callable[..., Any]] = []

    def connect(self, listener: Callable[..., Any]) -> None:
        """Subscribe a listener."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def disconnect(self, listener: Callable[..., Any]) -> None:
        """Remove a listener; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def fire(self, *args: Any) -> None:
        # Listeners may disconnect themselves while firing
        for listener in list(self._listeners):
            listener(*args)

    def __len__(self) -> int:
        return len(self._listeners)
