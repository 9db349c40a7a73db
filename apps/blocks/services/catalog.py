"""Read access to persisted blocks in the shape the engine consumes."""

from __future__ import annotations

from typing import List, Optional

from apps.blocks.models import Block, BlockRegion
from apps.blocks.services.context import PlacedBlock

__all__ = ["DatabaseBlockCatalog", "to_placed"]


def to_placed(block: Block, placement: Optional[BlockRegion] = None) -> PlacedBlock:
    """Snapshot ``block`` (with its roles prefetched) for the engine."""

    locale = block.locale if isinstance(block.locale, list) else []
    return PlacedBlock(
        id=block.pk,
        handler=block.handler,
        status=bool(block.status),
        visibility=block.visibility,
        pages=block.pages or "",
        locale=frozenset(locale),
        roles=frozenset(role.name for role in block.roles.all()),
        ordering=placement.ordering if placement is not None else 0,
        theme=placement.theme if placement is not None else "",
        region=placement.region if placement is not None else "",
        title=block.title,
        body=block.body,
        settings=dict(block.settings or {}),
    )


class DatabaseBlockCatalog:
    """Block catalog backed by the ``Block``/``BlockRegion`` tables."""

    def find_assigned(self, theme: str, region: str) -> List[PlacedBlock]:
        """Enabled blocks placed in ``theme``/``region``, in placement order."""

        placements = (
            BlockRegion.objects.filter(theme=theme, region=region, block__status=True)
            .select_related("block")
            .prefetch_related("block__roles")
            .order_by("pk")
        )
        return [to_placed(placement.block, placement) for placement in placements]

    def find_all(self) -> List[PlacedBlock]:
        blocks = Block.objects.prefetch_related("roles").order_by("pk")
        return [to_placed(block) for block in blocks]
