from django import template

from apps.blocks.services.context import RequestContext
from apps.blocks.services.regions import get_composer, render_region

register = template.Library()


def _block_context(context):
    """Return the request's block context, building it when middleware is absent.

    The template context must include ``request``.
    """

    if "request" not in context:
        raise ValueError("Template context does not include 'request'.")
    request = context["request"]
    block_context = getattr(request, "block_context", None)
    if block_context is None:
        block_context = RequestContext.from_request(request)
        request.block_context = block_context
    return block_context


@register.simple_tag(name="render_region", takes_context=True)
def render_region_tag(context, region):
    """Render all blocks visible in ``region`` for the current request."""

    return render_region(region, _block_context(context))


@register.simple_tag(takes_context=True)
def blocks_in(context, region, include_hidden=False):
    """Return the ordered blocks of ``region``; use with ``as``."""

    block_context = _block_context(context)
    return list(
        get_composer().list_for(
            block_context.theme, region, block_context, include_hidden=include_hidden
        )
    )
