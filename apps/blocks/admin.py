from django.contrib import admin, messages

from .models import Block, BlockRegion
from .services.cache import clear_cache


class BlockRegionInline(admin.TabularInline):
    model = BlockRegion
    extra = 0
    fields = ("theme", "region", "ordering")


@admin.register(Block)
class BlockAdmin(admin.ModelAdmin):
    list_display = ("title", "handler", "status", "visibility", "updated_at")
    search_fields = ("title", "description", "handler")
    list_filter = ("status", "visibility", "handler")
    filter_horizontal = ("roles",)
    inlines = (BlockRegionInline,)
    actions = ("clear_blocks_cache",)

    @admin.action(description="Clear the blocks cache")
    def clear_blocks_cache(self, request, queryset):
        clear_cache()
        self.message_user(request, "Blocks cache cleared.", messages.SUCCESS)


@admin.register(BlockRegion)
class BlockRegionAdmin(admin.ModelAdmin):
    list_display = ("block", "theme", "region", "ordering")
    search_fields = ("block__title", "theme", "region")
    list_filter = ("theme", "region")
    autocomplete_fields = ("block",)
