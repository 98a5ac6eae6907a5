"""
Minimal synchronous event emitter.

Handlers run in registration order on the emitting call; exceptions raised
by a handler propagate to whoever triggered the event.
"""
from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Optional

Handler = Callable[[Any], None]


class EventEmitter:
    """Named events with per-name handler lists."""

    def __init__(self, event_names: Optional[Iterable[str]] = None):
        """
        Args:
            event_names: If given, only these names may be subscribed or emitted
        """
        self._names = frozenset(event_names) if event_names is not None else None
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)

    def _check(self, name: str) -> None:
        if self._names is not None and name not in self._names:
            raise ValueError(f"Unknown event: {name}")

    def on(self, name: str, handler: Handler) -> Callable[[], bool]:
        """
        Subscribe to an event.

        Returns:
            A callable that unsubscribes the handler
        """
        self._check(name)
        self._handlers[name].append(handler)
        return lambda: self.off(name, handler)

    def off(self, name: str, handler: Handler) -> bool:
        """Unsubscribe; False if the handler was not registered."""
        handlers = self._handlers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def emit(self, name: str, detail: Any = None) -> int:
        """
        Call every handler for ``name`` with ``detail``.

        Returns:
            Number of handlers called
        """
        self._check(name)
        handlers = list(self._handlers.get(name, []))
        for handler in handlers:
            handler(detail)
        return len(handlers)

    def clear(self) -> None:
        """Drop every handler."""
        self._handlers.clear()
