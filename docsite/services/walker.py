"""Content walker: loads every page and module under the content root."""

import logging
import os
import posixpath
from typing import Dict, Iterator, Sequence, Tuple

from docsite.errors import FileReadFailure, MissingContentRoot
from docsite.models.module import Module
from docsite.models.page import LegacyPage
from docsite.services.normalizer import normalize_route
from docsite.services.parser import RecordFormat, parse_record

logger = logging.getLogger(__name__)


def _iter_files(root: str) -> Iterator[Tuple[str, str]]:
    """Yield ``(absolute_path, relative_path)`` for every regular file, in lexical order.

    ``relative_path`` is POSIX style with a leading slash, e.g. ``/guides/foo.yml``.
    """

    def _raise(exc: OSError) -> None:
        raise FileReadFailure(exc.filename or root, exc) from exc

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for filename in sorted(filenames):
            full_path = os.path.join(dirpath, filename)
            if not os.path.isfile(full_path):
                continue
            relative = os.path.relpath(full_path, root).replace(os.sep, "/")
            yield full_path, "/" + relative


def _read(full_path: str, relative: str) -> bytes:
    try:
        with open(full_path, "rb") as fh:
            return fh.read()
    except OSError as exc:
        raise FileReadFailure(relative, exc) from exc


def walk_content(
    root: str,
    legacy_suffixes: Sequence[str] = (".yml",),
    module_suffixes: Sequence[str] = (".json",),
) -> Tuple[Dict[str, LegacyPage], Dict[str, Module]]:
    """Parse every content file under *root* into two route-keyed indexes.

    Files ending in one of *legacy_suffixes* become :class:`LegacyPage`
    records, files ending in one of *module_suffixes* become
    :class:`Module` records; anything else is a static asset and is
    skipped.

    Raises:
        MissingContentRoot: *root* is not an existing directory.
        FileReadFailure: a content file could not be read.
        DecodeFailure: a content file could not be decoded.
    """
    if not os.path.isdir(root):
        raise MissingContentRoot(root)

    pages: Dict[str, LegacyPage] = {}
    modules: Dict[str, Module] = {}
    legacy_suffixes = tuple(legacy_suffixes)
    module_suffixes = tuple(module_suffixes)

    for full_path, relative in _iter_files(root):
        if relative.endswith(legacy_suffixes):
            fmt, index = RecordFormat.LEGACY, pages
        elif relative.endswith(module_suffixes):
            fmt, index = RecordFormat.MODULE, modules
        else:
            continue

        record = parse_record(_read(full_path, relative), relative, fmt)
        route = normalize_route(relative)
        record.resource_path = route
        record.source_path = relative
        if fmt is RecordFormat.MODULE:
            record.name = posixpath.basename(route) or route

        if route in index:
            logger.warning(
                "Route %s defined by both %s and %s – keeping %s",
                route, index[route].source_path, relative, relative,
            )
        index[route] = record

    logger.debug("Walked %s: %d pages, %d modules", root, len(pages), len(modules))
    return pages, modules
