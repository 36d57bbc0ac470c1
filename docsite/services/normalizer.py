"""Route normalisation utilities: route keys and anchor slugs."""

import posixpath
import re
import unicodedata

_INDEX_SUFFIX = "/index"


def _normalize_once(path: str) -> str:
    route = posixpath.normpath(path) if path else "."

    # POSIX keeps exactly two leading slashes; routes never need them
    if route.startswith("//"):
        route = "/" + route.lstrip("/")

    route = route.lower()

    # Remove the file extension of the last segment
    dot = route.rfind(".")
    if dot > route.rfind("/"):
        route = route[:dot]

    if route.endswith(_INDEX_SUFFIX):
        route = route[: -len(_INDEX_SUFFIX)]

    return route or "/"


def normalize_route(path: str) -> str:
    """Return the canonical route key for a content-relative *path*.

    The path is cleaned (``.``/``..`` and duplicate separators collapsed),
    lowercased, stripped of its file extension and of a trailing
    ``/index`` segment.  An empty result maps to ``/``.

    Each step can expose another extension or ``index`` segment
    (``foo.tar.gz``, ``index/index.yml``), so the steps are repeated until
    the key is stable; normalizing a route key returns it unchanged.
    """
    route = _normalize_once(path)
    while True:
        again = _normalize_once(route)
        if again == route:
            return route
        route = again


def anchor_slug(name: str) -> str:
    """Generate an anchor slug from *name*.

    The slug is lowercased, ASCII-only, and uses hyphens as separators.
    """
    slug = unicodedata.normalize("NFKD", name)
    slug = slug.encode("ascii", "ignore").decode("ascii")

    # Lowercase and replace runs of non-alphanumeric chars with a single hyphen
    slug = re.sub(r"[^a-z0-9]+", "-", slug.lower())
    return slug.strip("-")


def type_anchor(type_name: str) -> str:
    """Return the in-page anchor used for a type that has no page of its own."""
    return "#type-" + anchor_slug(type_name)
