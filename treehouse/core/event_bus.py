from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Any, Callable, Dict, List, TypeAlias

EventPayload: TypeAlias = Dict[str, Any]
EventHandler: TypeAlias = Callable[[EventPayload], None]


class EventBus:
    """Synchronous PubSub hub for state-change notifications.

    Handlers run in the publisher's thread, in subscription order, before
    ``publish`` returns.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def subscribe(self, topic: str, handler: EventHandler) -> None:
        """Register a handler for a topic."""
        with self._lock:
            if handler not in self._subscribers[topic]:
                self._subscribers[topic].append(handler)

    def unsubscribe(self, topic: str, handler: EventHandler) -> None:
        """Remove a handler from a topic."""
        with self._lock:
            if handler in self._subscribers.get(topic, []):
                self._subscribers[topic].remove(handler)

    def publish(self, topic: str, payload: EventPayload) -> None:
        """Publish an event to all subscribers."""
        with self._lock:
            handlers = list(self._subscribers.get(topic, []))

        if not handlers:
            self._logger.debug(f"No subscribers for topic '{topic}'")
            return

        self._logger.debug(f"Publishing to topic '{topic}' with {len(handlers)} handler(s)")
        for handler in handlers:
            self._safe_dispatch(topic, handler, payload)

    def _safe_dispatch(
        self,
        topic: str,
        handler: EventHandler,
        payload: EventPayload,
    ) -> None:
        """Dispatch wrapper to keep one handler failure from stopping the bus."""
        handler_name = getattr(handler, "__name__", str(handler))
        try:
            handler(payload)
        except Exception as exc:
            self._logger.exception(
                f"EventBus handler error in '{handler_name}' for topic '{topic}'",
                exc_info=exc,
            )

    def clear(self) -> None:
        """Remove all subscriptions."""
        with self._lock:
            self._subscribers.clear()
