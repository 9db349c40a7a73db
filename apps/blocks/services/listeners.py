"""Index of handler namespaces allowed to own blocks right now."""

from __future__ import annotations

from typing import Callable, FrozenSet, Iterable, Optional

from apps.blocks.registry import handler_registry, handlers_changed
from apps.blocks.services.context import CORE_HANDLER

__all__ = ["ListenerIndex"]


class ListenerIndex:
    """Answer which handlers are active in this process.

    ``source`` returns the namespaces of the currently active handlers; by
    default that is the global handler registry. The answer is memoized per
    process, kept out of the shared cache backend, and dropped whenever
    ``handlers_changed`` fires.
    """

    def __init__(self, source: Optional[Callable[[], Iterable[str]]] = None) -> None:
        if source is None:
            source = handler_registry.active_namespaces
        self.source = source
        self._active: Optional[FrozenSet[str]] = None
        handlers_changed.connect(self._on_handlers_changed)

    def active_handlers(self) -> FrozenSet[str]:
        active = self._active
        if active is None:
            active = self._active = frozenset(self.source()) | {CORE_HANDLER}
        return active

    def is_handler_active(self, namespace: str, active: Optional[FrozenSet[str]] = None) -> bool:
        if namespace == CORE_HANDLER:
            return True
        if active is None:
            active = self.active_handlers()
        return namespace in active

    def refresh(self) -> None:
        self._active = None

    def _on_handlers_changed(self, sender, **kwargs) -> None:
        self.refresh()
