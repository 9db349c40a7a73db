"""In-memory stand-ins for the block catalog used by engine tests."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List

from apps.blocks.services.context import PlacedBlock, RequestContext


def make_block(block_id, theme="default", region="sidebar", **kwargs) -> PlacedBlock:
    kwargs.setdefault("title", f"Block {block_id}")
    for name in ("locale", "roles"):
        if name in kwargs:
            kwargs[name] = frozenset(kwargs[name])
    return PlacedBlock(id=block_id, theme=theme, region=region, **kwargs)


def make_context(path="/", locale="en", theme="default", roles=(), handlers=None) -> RequestContext:
    return RequestContext(
        path=path,
        locale=locale,
        theme=theme,
        roles=frozenset(roles),
        handlers=handlers,
    )


class FakeCatalog:
    """Keeps placements in insertion order, like the database catalog."""

    def __init__(self, blocks: Iterable[PlacedBlock] = ()) -> None:
        self.blocks: List[PlacedBlock] = list(blocks)

    def find_assigned(self, theme, region):
        return [b for b in self.blocks if b.theme == theme and b.region == region]

    def find_all(self):
        seen = {}
        for block in self.blocks:
            seen.setdefault(block.id, replace(block, theme="", region="", ordering=0))
        return list(seen.values())

    def add(self, block: PlacedBlock) -> None:
        self.blocks.append(block)

    def update(self, block_id, **changes) -> None:
        self.blocks = [
            replace(block, **changes) if block.id == block_id else block
            for block in self.blocks
        ]

    def remove(self, block_id) -> None:
        self.blocks = [block for block in self.blocks if block.id != block_id]
