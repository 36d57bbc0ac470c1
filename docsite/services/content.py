"""Content model construction and publication.

``build_model`` runs one full parse cycle (walk, type index, extension
resolution, sanitizing) on freshly parsed records and returns an
immutable :class:`ContentModel`.  ``ContentStore`` owns the model that is
currently served and replaces it in a single reference swap, so a
request either sees the old model or the new one, never a half-built
one.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Union

from docsite.config import Settings
from docsite.errors import ContentError, ReloadAborted
from docsite.models.module import Module
from docsite.models.page import LegacyPage
from docsite.services.normalizer import normalize_route, type_anchor
from docsite.services.resolver import ResolutionReport, resolve_extensions
from docsite.services.sanitizer import sanitize_module, sanitize_page
from docsite.services.type_index import build_type_index
from docsite.services.walker import walk_content

logger = logging.getLogger(__name__)

Document = Union[LegacyPage, Module]


@dataclass(frozen=True)
class ContentModel:
    pages: Mapping[str, LegacyPage]
    modules: Mapping[str, Module]
    type_routes: Mapping[str, str]
    report: ResolutionReport
    built_at: float = field(default_factory=time.time)

    def resolve(self, route: str) -> Optional[Document]:
        """Return the page or module filed under *route*, legacy pages first."""
        key = normalize_route(route)
        page = self.pages.get(key)
        if page is not None:
            return page
        return self.modules.get(key)

    def route_for_type(self, type_name: str) -> Optional[str]:
        return self.type_routes.get(type_name)

    def type_link(self, type_name: str) -> str:
        """Return the route documenting *type_name*, or a local ``#type-`` anchor."""
        return self.route_for_type(type_name) or type_anchor(type_name)


def build_model(
    root: str,
    legacy_suffixes: Sequence[str] = (".yml",),
    module_suffixes: Sequence[str] = (".json",),
) -> ContentModel:
    """Parse the content tree at *root* into a new :class:`ContentModel`.

    Raises:
        ContentError: the content root is missing, or a file could not be
            read or decoded.  Nothing is published in that case.
    """
    pages, modules = walk_content(root, legacy_suffixes, module_suffixes)

    type_routes = build_type_index(pages)
    report = resolve_extensions(pages, type_routes)

    for page in pages.values():
        sanitize_page(page)
    for module in modules.values():
        sanitize_module(module)

    logger.info(
        "content parsed! %d pages, %d modules, %d types (%d dangling, %d unresolved)",
        len(pages), len(modules), len(type_routes), len(report.dangling), len(report.unresolved),
    )

    return ContentModel(
        pages=MappingProxyType(pages),
        modules=MappingProxyType(modules),
        type_routes=MappingProxyType(type_routes),
        report=report,
    )


class ContentStore:
    """Holds the published :class:`ContentModel` and rebuilds it on demand."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._model: Optional[ContentModel] = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._model is not None

    def snapshot(self) -> ContentModel:
        """Return the currently published model.

        Raises:
            RuntimeError: no reload has succeeded yet.
        """
        model = self._model
        if model is None:
            raise RuntimeError("Content has not been loaded yet.")
        return model

    def reload(self) -> ContentModel:
        """Build a new model and publish it.

        Reloads are serialized: a build and its swap happen under one lock,
        so an older build can never replace a newer one.  Readers never
        take the lock.

        Raises:
            ReloadAborted: the parse cycle failed; the previous model (if
                any) is still the one served.
        """
        with self._lock:
            try:
                model = build_model(
                    self.settings.content_dir,
                    self.settings.legacy_suffixes,
                    self.settings.module_suffixes,
                )
            except ContentError as exc:
                logger.error("Reload aborted: %s", exc)
                raise ReloadAborted(exc) from exc

            self._model = model
        return model

    def reload_if_live(self) -> ContentModel:
        """Rebuild before serving when live reload is on, then return the model.

        A failed live reload is logged and the prior model keeps serving.
        """
        if self.settings.live_reload:
            try:
                return self.reload()
            except ReloadAborted:
                logger.error("Live reload failed – serving previously published content")
        return self.snapshot()
