"""Compose the ordered list of blocks that render in a theme region."""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from django.core.exceptions import ImproperlyConfigured
from django.utils.safestring import mark_safe

from apps.blocks.conf import settings
from apps.blocks.registry import render_block
from apps.blocks.services.cache import ResultCache
from apps.blocks.services.context import CORE_HANDLER, PlacedBlock, RequestContext
from apps.blocks.services.listeners import ListenerIndex
from apps.blocks.services.visibility import VisibilityEvaluator

logger = logging.getLogger(__name__)

__all__ = ["RegionComposer", "get_composer", "render_region"]

THEME_KINDS = ("front", "back")


def theme_for(kind: str) -> str:
    if kind == "front":
        return settings.BLOCKS_FRONT_THEME
    if kind == "back":
        return settings.BLOCKS_BACK_THEME
    raise ImproperlyConfigured(f"Unknown theme kind {kind!r}; expected one of {THEME_KINDS}")


def theme_regions(theme: str) -> Dict[str, str]:
    """Region slug -> display name for ``theme`` as configured in settings."""

    return dict((settings.BLOCKS_THEMES or {}).get(theme) or {})


class RegionComposer:
    """Filter, order and memoize the blocks of one region.

    ``catalog`` must provide ``find_assigned(theme, region)`` and
    ``find_all()`` returning :class:`PlacedBlock` sequences in catalog order.
    """

    def __init__(
        self,
        catalog=None,
        *,
        cache: Optional[ResultCache] = None,
        listeners: Optional[ListenerIndex] = None,
        evaluator: Optional[VisibilityEvaluator] = None,
    ) -> None:
        if catalog is None:
            from apps.blocks.services.catalog import DatabaseBlockCatalog

            catalog = DatabaseBlockCatalog()
        self.catalog = catalog
        self.cache = cache or ResultCache()
        self.listeners = listeners or ListenerIndex()
        self.evaluator = evaluator or VisibilityEvaluator(cache=self.cache)

    # ------------------------------------------------------------------
    # Request path
    # ------------------------------------------------------------------
    def list_for(
        self,
        theme: str,
        region: str,
        context: RequestContext,
        *,
        include_hidden: bool = False,
    ) -> Tuple[PlacedBlock, ...]:
        """Blocks of ``theme``/``region`` that render for ``context``, in order.

        With ``include_hidden`` the visibility rules are skipped, leaving only
        the status and handler filters. Listings are keyed by the handler set
        in effect as well as by the context fingerprint.
        """

        handlers = self._handlers_for(context)
        key = ("region", theme, region, include_hidden, tuple(sorted(handlers))) + context.fingerprint()
        return self.cache.get_or_set(
            key,
            lambda: self._compose(
                theme, region, context, handlers=handlers, check_visibility=not include_hidden
            ),
        )

    def _handlers_for(self, context: Optional[RequestContext]) -> FrozenSet[str]:
        handlers = context.handlers if context is not None else None
        if handlers is None:
            return self.listeners.active_handlers()
        return frozenset(handlers) | {CORE_HANDLER}

    def _compose(
        self,
        theme: str,
        region: str,
        context: Optional[RequestContext] = None,
        *,
        handlers: Optional[FrozenSet[str]] = None,
        check_visibility: bool = True,
    ) -> Tuple[PlacedBlock, ...]:
        blocks: Sequence[PlacedBlock] = self.catalog.find_assigned(theme, region)

        if handlers is None:
            handlers = self._handlers_for(context)

        eligible: List[PlacedBlock] = []
        for block in blocks:
            if not block.status:
                continue
            if not self.listeners.is_handler_active(block.handler, handlers):
                continue
            if check_visibility and context is not None and not self.evaluator.is_allowed(block, context):
                continue
            eligible.append(block)

        # sorted() is stable: equal ranks keep catalog order.
        ordered = tuple(sorted(eligible, key=lambda block: block.ordering))
        logger.debug(
            "Composed %s/%s: %s", theme, region, [block.id for block in ordered]
        )
        return ordered

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------
    def in_theme(self, kind: str = "front", context: Optional[RequestContext] = None) -> Dict[str, List[PlacedBlock]]:
        """Renderable blocks of every region of the front or back theme.

        Without ``context`` only status and handler filters apply; with one,
        blocks must also pass the visibility rules.
        """

        theme = theme_for(kind)
        out: Dict[str, List[PlacedBlock]] = {}
        for slug, name in theme_regions(theme).items():
            if context is not None:
                blocks = self.list_for(theme, slug, context.for_theme(theme))
            else:
                blocks = self._compose(theme, slug)
            out[name] = list(blocks)
        return out

    def unused(self, context: Optional[RequestContext] = None) -> List[PlacedBlock]:
        """Blocks that render nowhere in the front or back theme.

        A block counts as unused when it is disabled or missing from every
        region listing of both themes, provided its handler is active.
        """

        placed = set()
        for kind in THEME_KINDS:
            for blocks in self.in_theme(kind, context).values():
                placed.update(block.id for block in blocks)

        active = self.listeners.active_handlers()
        return [
            block
            for block in self.catalog.find_all()
            if (not block.status or block.id not in placed)
            and self.listeners.is_handler_active(block.handler, active)
        ]

    def clear_cache(self) -> None:
        self.cache.invalidate()


def get_composer() -> RegionComposer:
    """Composer wired to the database catalog and the configured cache."""

    return RegionComposer()


def render_region(region: str, context: RequestContext, composer: Optional[RegionComposer] = None) -> str:
    """Render every block of ``region`` in the context's theme."""

    composer = composer or get_composer()
    blocks = composer.list_for(context.theme, region, context)
    return mark_safe("".join(render_block(block, context) for block in blocks))
