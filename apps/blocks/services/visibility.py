"""Decide whether one block may render for one request."""

from __future__ import annotations

import logging
from typing import Optional

from apps.blocks.services.cache import ResultCache
from apps.blocks.services.context import PlacedBlock, RequestContext, Visibility
from apps.blocks.services.patterns import url_match
from apps.blocks.services.predicates import evaluate_predicate

logger = logging.getLogger(__name__)

__all__ = ["VisibilityEvaluator"]


class VisibilityEvaluator:
    """Locale, role and page rules of a block, cheapest checks first.

    Results are memoized per ``(block id, locale, roles, path, theme)`` in
    the shared block cache group.
    """

    def __init__(self, cache: Optional[ResultCache] = None) -> None:
        self.cache = cache or ResultCache()

    def is_allowed(self, block: PlacedBlock, context: RequestContext) -> bool:
        key = ("allowed", block.id) + context.fingerprint()
        return self.cache.get_or_set(key, lambda: self.evaluate(block, context))

    def evaluate(self, block: PlacedBlock, context: RequestContext) -> bool:
        """Uncached decision for ``block`` under ``context``."""

        if block.locale and context.locale not in block.locale:
            return False

        if block.roles and not (block.roles & context.roles):
            return False

        if block.visibility == Visibility.EXCLUDE:
            return not url_match(block.pages, context)
        if block.visibility == Visibility.INCLUDE:
            return url_match(block.pages, context)
        if block.visibility == Visibility.CUSTOM:
            return evaluate_predicate(block.pages, context)

        logger.warning("Block %s has unknown visibility %r; hiding it", block.id, block.visibility)
        return False
