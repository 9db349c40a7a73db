"""Registry of named visibility predicates.

Blocks using the ``custom`` visibility strategy store the name of a
predicate in their ``pages`` field. A predicate is a plain callable that
receives the :class:`~apps.blocks.services.context.RequestContext` and
returns ``True`` when the block may be shown::

    from apps.blocks.services.predicates import register_predicate

    @register_predicate("weekdays")
    def weekdays(context):
        return date.today().weekday() < 5

Evaluation through :func:`evaluate_predicate` never raises: unknown names,
errors and non-boolean results all deny the block.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

Predicate = Callable[..., bool]

_PREDICATES: Dict[str, Predicate] = {}


def register_predicate(name: str, func: Optional[Predicate] = None):
    """Register ``func`` under ``name``; usable as a decorator."""

    def decorator(fn: Predicate) -> Predicate:
        key = str(name).strip()
        if not key:
            raise ValueError("Predicate name must not be blank")
        if key in _PREDICATES and _PREDICATES[key] is not fn:
            raise ValueError(f"Duplicate predicate name: {key}")
        _PREDICATES[key] = fn
        return fn

    if func is not None:
        return decorator(func)
    return decorator


def unregister_predicate(name: str) -> None:
    _PREDICATES.pop(str(name).strip(), None)


def get_predicate(name: str) -> Optional[Predicate]:
    return _PREDICATES.get((name or "").strip())


def get_predicates() -> Dict[str, Predicate]:
    return dict(_PREDICATES)


def check_predicate(name: str, context) -> bool:
    """Evaluate predicate ``name`` letting any error propagate.

    Meant for administrators testing a block's rule; request handling goes
    through :func:`evaluate_predicate` instead.
    """

    func = get_predicate(name)
    if func is None:
        raise LookupError(f"Unknown visibility predicate: {name!r}")
    result = func(context)
    if not isinstance(result, bool):
        raise TypeError(
            f"Visibility predicate {name!r} returned {type(result).__name__}, expected bool"
        )
    return result


def evaluate_predicate(name: str, context) -> bool:
    """Evaluate predicate ``name``; every failure counts as ``False``."""

    try:
        return check_predicate(name, context)
    except Exception:
        logger.exception("Visibility predicate %r failed; hiding block", name)
        return False
