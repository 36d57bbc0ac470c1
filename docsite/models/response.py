from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

from docsite.models.module import Module
from docsite.models.page import LegacyPage


class DocumentResponse(BaseModel):
    route: str
    kind: Literal["page", "module"]
    title: str
    type_links: Dict[str, str]
    """Link target for every type the document mentions.

    A documented type links to its page route, any other type to a
    ``#type-<slug>`` anchor on the current page.
    """
    page: Optional[LegacyPage] = None
    module: Optional[Module] = None


class TypeRouteResponse(BaseModel):
    type: str
    route: str
    link: str


class DanglingExtensionResult(BaseModel):
    route: str
    extends: str


class ReloadResponse(BaseModel):
    pages: int
    modules: int
    types: int
    resolved: List[str]
    dangling: List[DanglingExtensionResult]
    unresolved: List[str]
    attempts: int
    built_at: float
    """Unix time at which the published model was built."""
