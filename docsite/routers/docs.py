import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response

from docsite.models.page import LegacyPage
from docsite.models.response import DocumentResponse
from docsite.services.content import ContentModel, Document
from docsite.services.normalizer import normalize_route

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND_ROUTE = "/404"


def build_document_response(model: ContentModel, document: Document) -> DocumentResponse:
    """Assemble the JSON view of a page or module, with its type links resolved."""
    type_links = {name: model.type_link(name) for name in document.referenced_types()}
    if isinstance(document, LegacyPage):
        return DocumentResponse(
            route=document.resource_path,
            kind="page",
            title=document.display_title,
            type_links=type_links,
            page=document,
        )
    return DocumentResponse(
        route=document.resource_path,
        kind="module",
        title=document.display_title,
        type_links=type_links,
        module=document,
    )


@router.get(
    "/{path:path}",
    response_model=DocumentResponse,
    summary="Serve a documentation page or module",
    description=(
        "Looks the request path up as a route key (lowercased, without "
        "extension or trailing `/index`).  Non-canonical paths are "
        "redirected to their route key; unknown paths get the `/404` "
        "page, or a redirect to `/` when there is none."
    ),
)
def serve_document(request: Request, path: str) -> DocumentResponse | Response:
    model = request.app.state.store.reload_if_live()

    request_path = request.url.path
    route = normalize_route(request_path)

    document = model.resolve(route)
    if document is not None:
        if request_path != route:
            logger.info("Redirecting %s to %s", request_path, route)
            return RedirectResponse(route, status_code=301)
        return build_document_response(model, document)

    if route != "/":
        logger.info("Not found: %s", route)

        page_404 = model.pages.get(NOT_FOUND_ROUTE)
        if page_404 is not None:
            body = build_document_response(model, page_404)
            return JSONResponse(status_code=404, content=body.model_dump(mode="json"))

        return RedirectResponse("/", status_code=303)

    return PlainTextResponse("hello world")
