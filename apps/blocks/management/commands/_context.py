"""Shared ``--path``/``--locale``/``--role`` options for block commands."""

from apps.blocks.conf import settings
from apps.blocks.services.context import RequestContext


def add_context_arguments(parser):
    parser.add_argument(
        "--path",
        default="/",
        help="Request path to evaluate visibility rules against.",
    )
    parser.add_argument(
        "--locale",
        help="Locale code of the simulated request. Defaults to LANGUAGE_CODE.",
    )
    parser.add_argument(
        "--role",
        action="append",
        default=[],
        help="Role (group name) of the simulated user. Repeat for several roles.",
    )
    parser.add_argument(
        "--theme",
        help="Theme of the simulated request. Defaults to the front theme.",
    )


def context_from_options(options) -> RequestContext:
    return RequestContext(
        path=options.get("path") or "/",
        locale=options.get("locale") or settings.LANGUAGE_CODE,
        theme=options.get("theme") or settings.BLOCKS_FRONT_THEME,
        roles=frozenset(options.get("role") or ()),
    )
