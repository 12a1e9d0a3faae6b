"""
Tiny pub/sub event bus for cross-cutting client notifications.
"""

from typing import Any, Callable, Dict, List

from utils.logging_config import get_logger

logger = get_logger(__name__)

# Emitted by the request pipeline after an authentication failure
UNAUTHENTICATED = "unauthenticated"

Handler = Callable[[Any], None]


class EventBus:
    """Synchronous in-process publisher; handlers run in subscription order"""

    def __init__(self) -> None:
        self._subs: Dict[str, List[Handler]] = {}

    def subscribe(self, event: str, handler: Handler) -> Callable[[], None]:
        """
        Register a handler for an event

        Returns:
            Callable that removes the subscription
        """
        self._subs.setdefault(event, []).append(handler)

        def unsubscribe() -> None:
            handlers = self._subs.get(event, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def emit(self, event: str, payload: Any = None) -> None:
        for handler in list(self._subs.get(event, [])):
            try:
                handler(payload)
            except Exception as e:
                # One broken subscriber must not stop the others
                logger.error(f"Handler for '{event}' failed: {e}", exc_info=True)

    def handler_count(self, event: str) -> int:
        return len(self._subs.get(event, []))
