import logging
import logging.config
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from docsite.config import Settings
from docsite.routers.admin import limiter, router as admin_router
from docsite.routers.docs import router as docs_router
from docsite.routers.types import router as types_router
from docsite.services.content import ContentStore

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": "INFO", "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the documentation server for *settings* (read from the environment by default).

    The content model is loaded once at startup; a failure there is fatal
    and the server does not start.
    """
    settings = settings or Settings.from_env()
    store = ContentStore(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Loading content",
            extra={"content_dir": settings.content_dir, "live_reload": settings.live_reload},
        )
        store.reload()
        yield

    app = FastAPI(
        title="docsite – documentation server",
        description="Serves documentation pages and modules parsed from a content directory.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    # Rate-limiting state
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception for %s", request.url)
        return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})

    for static_dir in settings.static_dirs:
        directory = os.path.join(settings.content_dir, static_dir)
        if os.path.isdir(directory):
            app.mount(f"/{static_dir}", StaticFiles(directory=directory), name=static_dir)

    app.include_router(admin_router)
    app.include_router(types_router)
    # Catch-all content route, must stay last
    app.include_router(docs_router)

    return app


app = create_app()
