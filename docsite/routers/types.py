import logging

from fastapi import APIRouter, HTTPException, Request

from docsite.models.response import TypeRouteResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/_types", tags=["Types"])


@router.get(
    "/{type_name}",
    response_model=TypeRouteResponse,
    summary="Find the page documenting a type",
)
def type_route(request: Request, type_name: str) -> TypeRouteResponse:
    model = request.app.state.store.reload_if_live()

    route = model.route_for_type(type_name)
    if route is None:
        logger.info("No page documents type %r", type_name)
        raise HTTPException(status_code=404, detail=f"Type '{type_name}' is not documented.")

    return TypeRouteResponse(type=type_name, route=route, link=model.type_link(type_name))
