"""Extension resolver: merges base type members into derived type pages.

A page that documents type ``Player`` with ``extends: Object`` must show
the functions and properties of the ``Object`` page as well.  Bases can
extend other bases, and pages are discovered in file-system order, so
pages are processed from a FIFO queue: a page whose base is not settled
yet goes back to the end of the queue.

The queue stops when a full pass over the remaining pages merged
nothing.  Whatever is left at that point is part of a cycle (or sits on
top of one) and is left with its local content only.
"""

import logging
from collections import deque
from typing import Deque, List, Mapping, NamedTuple

from docsite.models.page import LegacyPage

logger = logging.getLogger(__name__)


class DanglingExtension(NamedTuple):
    """A page whose ``extends`` names a type nobody documents."""

    route: str
    extends: str


class ResolutionReport(NamedTuple):
    resolved: List[str]
    dangling: List[DanglingExtension]
    unresolved: List[str]
    attempts: int


def resolve_extensions(
    pages: Mapping[str, LegacyPage],
    type_index: Mapping[str, str],
) -> ResolutionReport:
    """Apply the base page of every extending type page, bases first.

    Each page is merged at most once and only from a base that is itself
    fully resolved, so the outcome does not depend on queue order.
    Dangling references and cycles are reported, never raised.
    """
    queue: Deque[LegacyPage] = deque()
    for page in pages.values():
        if page.type and page.extends:
            page.extension_base_applied = False
            queue.append(page)

    resolved: List[str] = []
    dangling: List[DanglingExtension] = []
    attempts = 0
    # Deferrals since the last successful merge
    stalled = 0

    while queue:
        if stalled >= len(queue):
            break

        page = queue.popleft()
        attempts += 1

        base_route = type_index.get(page.extends)
        base = pages.get(base_route) if base_route is not None else None
        if base is None:
            logger.warning(
                "Dangling extension: %s extends unknown type %r",
                page.resource_path, page.extends,
            )
            dangling.append(DanglingExtension(page.resource_path, page.extends))
            stalled = 0
            continue

        if base.ready_to_be_base:
            page.apply_extension_base(base)
            resolved.append(page.resource_path)
            stalled = 0
        else:
            # base is itself an extension and should be taken care of first
            queue.append(page)
            stalled += 1

    unresolved = sorted(page.resource_path for page in queue)
    if unresolved:
        logger.warning(
            "Extension cycle: %d page(s) left unresolved: %s",
            len(unresolved), ", ".join(unresolved),
        )

    return ResolutionReport(resolved, dangling, unresolved, attempts)
