import logging
from typing import Dict, Mapping

from docsite.models.page import LegacyPage

logger = logging.getLogger(__name__)


def build_type_index(pages: Mapping[str, LegacyPage]) -> Dict[str, str]:
    """Map every documented type name to the route of the page declaring it.

    When two pages declare the same type, the one visited last wins; the
    collision is logged so authors can fix the content.
    """
    index: Dict[str, str] = {}
    for route, page in pages.items():
        if not page.type:
            continue
        previous = index.get(page.type)
        if previous is not None and previous != route:
            logger.warning(
                "Type %r is documented by both %s and %s – using %s",
                page.type, previous, route, route,
            )
        index[page.type] = route
    return index
