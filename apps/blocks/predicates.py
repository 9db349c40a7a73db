"""Builtin visibility predicates for blocks using custom visibility."""

from apps.blocks.conf import settings
from apps.blocks.services.predicates import register_predicate


@register_predicate("authenticated")
def authenticated(context):
    return not context.is_anonymous


@register_predicate("anonymous")
def anonymous(context):
    return context.is_anonymous


@register_predicate("front_page")
def front_page(context):
    return context.path == settings.BLOCKS_FRONT_PAGE


@register_predicate("back_theme")
def back_theme(context):
    return context.theme == settings.BLOCKS_BACK_THEME
