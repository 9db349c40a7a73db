from django.db import transaction
from django.db.models.signals import m2m_changed, post_delete, post_save
from django.dispatch import receiver

from apps.blocks.models import Block, BlockRegion
from apps.blocks.registry import handlers_changed
from apps.blocks.services.cache import clear_cache


def _invalidate_blocks_cache() -> None:
    clear_cache()
    # Listings cached by other requests before the commit would still hold
    # the old rows, so drop the group again once the change is visible.
    transaction.on_commit(clear_cache)


@receiver(post_save, sender=Block, dispatch_uid="apps.blocks.block_saved")
@receiver(post_delete, sender=Block, dispatch_uid="apps.blocks.block_deleted")
@receiver(post_save, sender=BlockRegion, dispatch_uid="apps.blocks.block_region_saved")
@receiver(post_delete, sender=BlockRegion, dispatch_uid="apps.blocks.block_region_deleted")
def clear_cache_on_block_change(sender, **kwargs):
    """Any block or placement change may alter membership, order or visibility."""
    _invalidate_blocks_cache()


@receiver(m2m_changed, sender=Block.roles.through, dispatch_uid="apps.blocks.block_roles_changed")
def clear_cache_on_roles_change(sender, action, **kwargs):
    if action in {"post_add", "post_remove", "post_clear"}:
        _invalidate_blocks_cache()


@receiver(handlers_changed, dispatch_uid="apps.blocks.handlers_changed")
def clear_cache_on_handler_change(sender, **kwargs):
    clear_cache()
