"""Named-signal event bus.

Handlers are registered per (signal, namespace) slot. Registering a handler
into an occupied slot replaces it in place, so a module can override or
remove its own behavior by name without disturbing other subscribers.

Dispatch is synchronous: trigger() calls every handler of the signal in
registration order before returning.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

Handler = Callable[[str, Dict[str, Any]], None]


class EventBus:

    def __init__(self) -> None:
        self._handlers: Dict[str, Dict[str, Handler]] = {}

    def add(self, signal_name: str, namespace: str, handler: Handler) -> None:
        self._handlers.setdefault(signal_name, {})[namespace] = handler

    def remove(self, signal_name: str, namespace: str) -> None:
        slots = self._handlers.get(signal_name)
        if slots is None:
            return
        slots.pop(namespace, None)

    def has(self, signal_name: str, namespace: str) -> bool:
        return namespace in self._handlers.get(signal_name, {})

    def trigger(self, signal_name: str, **data: Any) -> None:
        # Copy so handlers may add/remove slots while being dispatched
        for handler in list(self._handlers.get(signal_name, {}).values()):
            handler(signal_name, data)
