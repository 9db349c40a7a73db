from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Optional
import logging

from django.dispatch import Signal
from django.utils.html import conditional_escape
from django.utils.safestring import mark_safe

from apps.blocks.services.context import CORE_HANDLER

log = logging.getLogger(__name__)

# Sent with ``namespace`` and ``active`` whenever a handler is switched on/off.
handlers_changed = Signal()


def _display_body(block, context) -> str:
    # Core block bodies are authored by administrators and stored as HTML.
    return mark_safe(block.body or "")


@dataclass(frozen=True)
class BlockHandler:
    """Plugin side of a block: owns the blocks whose ``handler`` is ``namespace``."""

    namespace: str
    display: Callable[[Any, Any], str]
    label: str = ""


class HandlerRegistry:
    """Known block handlers and which of them are currently active."""

    def __init__(self) -> None:
        self._handlers: Dict[str, BlockHandler] = {}
        self._active: FrozenSet[str] = frozenset()
        self.register(BlockHandler(CORE_HANDLER, _display_body, "Core"))

    def register(self, handler: BlockHandler, *, active: bool = True) -> None:
        if not handler.namespace:
            raise ValueError("BlockHandler.namespace is required")
        if handler.namespace in self._handlers:
            raise ValueError(f"Duplicate block handler: {handler.namespace}")
        self._handlers[handler.namespace] = handler
        if active:
            self._set_active(handler.namespace, True)

    def unregister(self, namespace: str) -> None:
        if namespace == CORE_HANDLER:
            raise ValueError("The core handler cannot be unregistered")
        if self._handlers.pop(namespace, None) is not None:
            self._set_active(namespace, False)

    def get(self, namespace: str) -> Optional[BlockHandler]:
        return self._handlers.get(namespace)

    def all(self) -> Dict[str, BlockHandler]:
        return dict(self._handlers)

    def activate(self, namespace: str) -> None:
        if namespace not in self._handlers:
            raise ValueError(f"Unknown block handler: {namespace}")
        self._set_active(namespace, True)

    def deactivate(self, namespace: str) -> None:
        if namespace == CORE_HANDLER:
            raise ValueError("The core handler is always active")
        self._set_active(namespace, False)

    def active_namespaces(self) -> FrozenSet[str]:
        return self._active

    def _set_active(self, namespace: str, active: bool) -> None:
        current = self._active
        updated = current | {namespace} if active else current - {namespace}
        if updated == current:
            return
        # Readers only ever see a complete frozenset.
        self._active = frozenset(updated)
        log.info("Block handler %s %s", namespace, "activated" if active else "deactivated")
        handlers_changed.send(sender=self.__class__, namespace=namespace, active=active)


handler_registry = HandlerRegistry()


def register(handler: BlockHandler, *, active: bool = True) -> None:
    handler_registry.register(handler, active=active)


def render_block(block, context, registry: Optional[HandlerRegistry] = None) -> str:
    """Hand ``block`` to its handler's ``display`` callable."""

    registry = registry or handler_registry
    handler = registry.get(block.handler)
    if handler is None:
        log.warning("No handler %r registered for block %s", block.handler, block.id)
        return ""
    return conditional_escape(handler.display(block, context))
