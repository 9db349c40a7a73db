"""Value types shared by the placement engine.

``PlacedBlock`` is the read-only view of a block record the engine works
with, and ``RequestContext`` carries everything about the current request
that can influence whether a block renders. Both are immutable so they can
be cached and shared between threads without copying.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Mapping, Optional, Tuple

from django.utils import translation

from apps.blocks.conf import settings

__all__ = ["CORE_HANDLER", "PlacedBlock", "RequestContext", "Visibility"]

CORE_HANDLER = "core"


class Visibility:
    EXCLUDE = "exclude"
    INCLUDE = "include"
    CUSTOM = "custom"


@dataclass(frozen=True)
class PlacedBlock:
    """Snapshot of a block as fetched through one of its region placements."""

    id: Any
    handler: str = CORE_HANDLER
    status: bool = True
    visibility: str = Visibility.EXCLUDE
    pages: str = ""
    locale: FrozenSet[str] = frozenset()
    roles: FrozenSet[str] = frozenset()
    ordering: int = 0
    theme: str = ""
    region: str = ""
    title: str = ""
    body: str = ""
    settings: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def is_core(self) -> bool:
        return self.handler == CORE_HANDLER


@dataclass(frozen=True)
class RequestContext:
    """Per-request inputs to the visibility rules."""

    path: str
    locale: str
    theme: str
    roles: FrozenSet[str] = frozenset()
    handlers: Optional[FrozenSet[str]] = None

    @property
    def is_anonymous(self) -> bool:
        return not self.roles

    def fingerprint(self) -> Tuple[str, Tuple[str, ...], str, str]:
        return (self.locale, tuple(sorted(self.roles)), self.path, self.theme)

    def for_theme(self, theme: str) -> "RequestContext":
        if theme == self.theme:
            return self
        return RequestContext(
            path=self.path,
            locale=self.locale,
            theme=theme,
            roles=self.roles,
            handlers=self.handlers,
        )

    @classmethod
    def from_request(cls, request, *, handlers: Optional[FrozenSet[str]] = None) -> "RequestContext":
        """Build the context for ``request``.

        The back-end theme is selected when the path falls under
        ``BLOCKS_BACK_PATH_PREFIX``; roles are the names of the user's groups
        and are empty for anonymous visitors.
        """

        path = getattr(request, "path_info", None) or getattr(request, "path", "/") or "/"
        locale = (
            getattr(request, "LANGUAGE_CODE", None)
            or translation.get_language()
            or settings.LANGUAGE_CODE
        )
        prefix = settings.BLOCKS_BACK_PATH_PREFIX
        if prefix and path.startswith(prefix):
            theme = settings.BLOCKS_BACK_THEME
        else:
            theme = settings.BLOCKS_FRONT_THEME

        roles: FrozenSet[str] = frozenset()
        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:
            roles = frozenset(user.groups.values_list("name", flat=True))

        return cls(path=path, locale=locale, theme=theme, roles=roles, handlers=handlers)
