"""Evidence checks and the combinators used to chain them.

A checklist item is resolved from an ordered list of sources, each a
zero-argument callable:

    any_of(
        lambda: path.exists(...),
        lambda: content.matches(...),
        lambda: client.has_default_community_health_file(...),
    )

Sources run strictly in order and evaluation stops at the first positive
answer. An exception raised by a source aborts the whole item, unless the
source is wrapped in ``best_effort``.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Source = Callable[[], bool]


def any_of(*sources: Source) -> bool:
    """Return True as soon as one source does, False if none does."""
    for index, source in enumerate(sources, start=1):
        if source():
            logger.debug("Satisfied by source %d of %d", index, len(sources))
            return True
    return False


def first_of(*sources: Callable[[], T | None]) -> T | None:
    """Return the first value that is not None, or None if every source gives none."""
    for source in sources:
        value = source()
        if value is not None:
            return value
    return None


def best_effort(source: Source, *errors: type[BaseException]) -> Source:
    """Wrap *source* so that the listed errors count as a negative answer.

    Only for sources that have an equally valid fallback after them.
    Defaults to catching any ``Exception``.
    """
    caught = errors or (Exception,)

    def wrapper() -> bool:
        try:
            return source()
        except caught as exc:
            logger.debug("Best-effort source failed, treating as negative: %s", exc)
            return False

    return wrapper
