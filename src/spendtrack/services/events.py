"""In-process change notifications.

Write paths publish a payload-free "something changed" signal; read paths
subscribe and reload. The bus is created by the application context and passed
to the components that need it.
"""

from __future__ import annotations

from typing import Callable

Listener = Callable[[], None]
Unsubscribe = Callable[[], None]


class ChangeBus:
    """Synchronous publish/subscribe with no payload and no persisted state."""

    def __init__(self, name: str = "changes") -> None:
        self.name = name
        # dict keeps insertion order and collapses duplicate subscriptions
        self._listeners: dict[Listener, None] = {}

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Register ``listener`` and return a callable that removes it again."""

        self._listeners[listener] = None

        def unsubscribe() -> None:
            self._listeners.pop(listener, None)

        return unsubscribe

    def publish(self) -> None:
        """Invoke every listener subscribed when the call started, once each.

        Listeners added during the pass wait for the next publish; a listener
        removing itself does not affect delivery to the others. Exceptions
        raised by a listener propagate to the publisher.
        """
        for listener in list(self._listeners):
            listener()

    def clear(self) -> None:
        self._listeners.clear()
