"""
Blog CMS API Server

FastAPI application providing endpoints for:
- Articles and series (visibility-filtered reads)
- Tags, categories and daily publications
- Development-only admin: create/edit content, schedules, calendar
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__
from .config import config, state
from .content import ContentMutator, ContentResolver, ContentStore
from .exceptions import (
    AlreadyExistsError,
    ContentError,
    ContentNotFoundError,
    ContentParseError,
    PermissionDeniedError,
)
from .routes import admin_router, articles_router, misc_router, series_router

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ContentNotFoundError: 404,
    PermissionDeniedError: 403,
    AlreadyExistsError: 409,
    ContentParseError: 500,
}


def configure_logging() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def content_error_handler(request: Request, exc: ContentError) -> JSONResponse:
    """Map content errors raised by the resolver or mutator to HTTP responses."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
        500,
    )
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ContentError, content_error_handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize application resources."""
    # Startup - skip if already initialized (e.g., by tests)
    if state.resolver is None:
        configure_logging()
        state.store = ContentStore(config.CONTENT_DIR)
        state.resolver = ContentResolver(
            state.store,
            production=config.is_production(),
            today=config.today,
        )
        state.mutator = ContentMutator(
            state.store,
            development=config.is_development(),
            today=config.today,
        )
        logger.info(
            f"Serving content from {config.CONTENT_DIR} "
            f"(environment: {config.APP_ENV}, admin: {state.mutator.development})"
        )
        if not state.store.root.is_dir():
            logger.warning(f"Content directory does not exist: {config.CONTENT_DIR}")

    yield


app = FastAPI(
    title="Blog CMS API",
    version=__version__,
    lifespan=lifespan
)

register_exception_handlers(app)

# Include routers
app.include_router(misc_router)
app.include_router(articles_router)
app.include_router(series_router)
app.include_router(admin_router)


def main() -> None:
    """Run the API with uvicorn on the configured port."""
    import uvicorn

    configure_logging()
    uvicorn.run("blogcms.server:app", host="127.0.0.1", port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
