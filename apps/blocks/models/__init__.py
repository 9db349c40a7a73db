from apps.blocks.models.block import Block, VisibilityChoices
from apps.blocks.models.block_region import BlockRegion

__all__ = [
    "Block",
    "BlockRegion",
    "VisibilityChoices",
]
