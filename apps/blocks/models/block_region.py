"""Placement of a block inside a theme region."""

from django.db import models

from apps.blocks.models.block import Block


class BlockRegion(models.Model):
    """Assigns a block to ``(theme, region)`` with an ordering rank."""

    block = models.ForeignKey(Block, on_delete=models.CASCADE, related_name="regions")
    theme = models.CharField(max_length=100)
    region = models.CharField(max_length=100)
    # Lower numbers render first; ties keep placement (primary key) order.
    ordering = models.IntegerField(default=0)

    class Meta:
        ordering = ("theme", "region", "ordering", "id")
        constraints = [
            models.UniqueConstraint(
                fields=("block", "theme", "region"),
                name="unique_block_theme_region",
            )
        ]
        indexes = [
            models.Index(fields=("theme", "region"), name="block_region_lookup_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.theme}/{self.region}: {self.block}"
