"""Runtime access to block placement configuration defaults."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from django.conf import settings as django_settings

__all__ = ["settings", "BlocksSettings"]


@dataclass
class BlocksSettings:
    """``BLOCKS_*`` settings with their defaults.

    Names listed in ``defaults`` fall back to the value given there when the
    project does not set them; any other name is read straight from Django.
    """

    defaults: dict[str, Any]

    def __getattr__(self, attr: str) -> Any:
        if attr in self.defaults:
            return getattr(django_settings, attr, self.defaults[attr])
        return getattr(django_settings, attr)


settings = BlocksSettings(
    defaults={
        "BLOCKS_CACHE_ALIAS": "default",
        "BLOCKS_CACHE_GROUP": "blocks",
        "BLOCKS_CACHE_TIMEOUT": 3600,
        "BLOCKS_FRONT_THEME": "default",
        "BLOCKS_BACK_THEME": "admin",
        "BLOCKS_BACK_PATH_PREFIX": "/admin/",
        "BLOCKS_FRONT_PAGE": "/",
        "BLOCKS_URL_LOCALE_PREFIX": False,
        "BLOCKS_THEMES": {
            "default": {
                "header": "Header",
                "sidebar": "Sidebar",
                "content": "Content",
                "footer": "Footer",
            },
            "admin": {
                "dashboard-main": "Dashboard Main",
                "dashboard-sidebar": "Dashboard Sidebar",
            },
        },
        "BLOCKS_HANDLERS": [],
    }
)
