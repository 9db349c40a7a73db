"""Compile newline separated path patterns into a single matcher.

Each line of the pattern text is one alternative. ``*`` matches any run of
characters and a line holding only ``/`` stands for the site front page,
which may live somewhere other than the root::

    /blog/*
    /
    /about

compiles to ``^(?:/blog/.*|/home|/about)$`` when the front page is
``/home``. Everything else is matched literally and case-sensitively
against the path, without its query string.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterable, Optional, Pattern, Sequence, Tuple

from apps.blocks.conf import settings

logger = logging.getLogger(__name__)

__all__ = ["PathMatcher", "compile_patterns", "split_patterns", "url_match"]

_LINE_BREAKS = re.compile(r"\r\n?|\n")
FRONT_PAGE_TOKEN = "/"


class PathMatcher:
    """Reusable, immutable test for one compiled pattern set."""

    __slots__ = ("_regex",)

    def __init__(self, regex: Optional[Pattern[str]] = None) -> None:
        self._regex = regex

    @property
    def pattern(self) -> Optional[str]:
        return self._regex.pattern if self._regex is not None else None

    def test(self, path: str) -> bool:
        if self._regex is None or path is None:
            return False
        path = path.split("?", 1)[0]
        if not path.startswith("/"):
            path = "/" + path
        return self._regex.fullmatch(path) is not None

    def __repr__(self) -> str:
        return f"PathMatcher({self.pattern!r})"


NEVER = PathMatcher()


def split_patterns(text: str) -> list[str]:
    """Return the non-blank lines of ``text`` with a leading slash each."""

    lines = []
    for raw in _LINE_BREAKS.split(text or ""):
        line = raw.strip()
        if not line:
            continue
        if not line.startswith("/"):
            line = "/" + line
        lines.append(line)
    return lines


def _has_locale_prefix(line: str, locales: Iterable[str]) -> bool:
    first = line.lstrip("/").split("/", 1)[0]
    return first in locales


def _line_to_regex(line: str, front_page: str, locale: Optional[str], locales: Sequence[str]) -> str:
    if line == FRONT_PAGE_TOKEN:
        target = front_page or "/"
        if not target.startswith("/"):
            target = "/" + target
        if locale and not _has_locale_prefix(target, locales):
            if target == "/":
                # The bare language root is the front page too.
                return re.escape(f"/{locale}") + "/?"
            target = f"/{locale}{target}"
        return re.escape(target)

    if locale and not _has_locale_prefix(line, locales):
        line = f"/{locale}{line}"
    return re.escape(line).replace(r"\*", ".*")


@lru_cache(maxsize=512)
def compile_patterns(
    text: str,
    front_page: str = "/",
    locale: Optional[str] = None,
    locales: Tuple[str, ...] = (),
) -> PathMatcher:
    """Compile ``text`` into a :class:`PathMatcher`.

    ``locale`` is only given in locale-prefix mode: lines that do not
    already start with one of ``locales`` are then rewritten to start with
    ``/<locale>``. Empty or unusable pattern text yields a matcher that never
    matches.
    """

    try:
        lines = split_patterns(text)
        if not lines:
            return NEVER
        alternatives = [_line_to_regex(line, front_page, locale, locales) for line in lines]
        return PathMatcher(re.compile("(?:" + "|".join(alternatives) + ")"))
    except (re.error, TypeError, AttributeError) as exc:
        logger.warning("Unusable block path patterns %r: %s", text, exc)
        return NEVER


def _configured_locales() -> Tuple[str, ...]:
    return tuple(code for code, _name in getattr(settings, "LANGUAGES", ()))


def url_match(patterns: str, context) -> bool:
    """Return whether ``context.path`` matches any line of ``patterns``."""

    if not patterns:
        return False
    front_page = settings.BLOCKS_FRONT_PAGE
    if settings.BLOCKS_URL_LOCALE_PREFIX:
        matcher = compile_patterns(patterns, front_page, context.locale, _configured_locales())
    else:
        matcher = compile_patterns(patterns, front_page)
    return matcher.test(context.path)
