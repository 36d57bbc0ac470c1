import logging

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from docsite.errors import ReloadAborted
from docsite.models.response import DanglingExtensionResult, ReloadResponse

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


@router.post(
    "/_reload",
    response_model=ReloadResponse,
    summary="Rebuild the content model",
    description=(
        "Runs a full parse cycle over the content directory and publishes "
        "the result.  When the cycle fails the previously published "
        "content keeps being served and the failure reason is returned."
    ),
)
@limiter.limit("5/minute")
def reload_content(request: Request) -> ReloadResponse:
    logger.info("Reload requested", extra={"client": get_remote_address(request)})

    try:
        model = request.app.state.store.reload()
    except ReloadAborted as exc:
        raise HTTPException(status_code=500, detail=f"Reload aborted: {exc}")

    report = model.report
    return ReloadResponse(
        pages=len(model.pages),
        modules=len(model.modules),
        types=len(model.type_routes),
        resolved=report.resolved,
        dangling=[
            DanglingExtensionResult(route=d.route, extends=d.extends) for d in report.dangling
        ],
        unresolved=report.unresolved,
        attempts=report.attempts,
        built_at=model.built_at,
    )
