import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .db import build_engine
from .errors import CatalogError, MethodNotAllowed, StoreError
from .handlers import router
from .store import CatalogStore
from .telemetry import configure_telemetry
from .views import CatalogViews

logger = logging.getLogger(__name__)
request_logger = logging.getLogger("book_catalog.requests")


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        app.state.store.initialize()
    except StoreError as exc:
        raise RuntimeError("Failed to initialize book store") from exc
    yield


async def catalog_error_handler(request: Request, exc: CatalogError) -> PlainTextResponse:
    if exc.status_code >= 500:
        logger.error("request.failed", extra={"path": request.url.path, "error": str(exc)})
    else:
        logger.info("request.rejected", extra={"path": request.url.path, "error": str(exc)})
    return PlainTextResponse(str(exc), status_code=exc.status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    if exc.status_code == MethodNotAllowed.status_code:
        response = await catalog_error_handler(request, MethodNotAllowed(f"{request.method} is not allowed on {request.url.path}"))
    else:
        response = PlainTextResponse(str(exc.detail), status_code=exc.status_code)
    response.headers.update(exc.headers or {})
    return response


def create_app(
    settings: Settings | None = None,
    store: CatalogStore | None = None,
    views: CatalogViews | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="Server-rendered catalog of book records.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store or CatalogStore(build_engine(settings.database_url, echo=settings.database_echo))
    app.state.views = views or CatalogViews(settings.templates_dir)

    app.include_router(router)
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    @app.middleware("http")
    async def request_logging_middleware(request, call_next):
        request_logger.info("request.start", extra={"path": request.url.path, "method": request.method})
        response = await call_next(request)
        request_logger.info(
            "request.end",
            extra={"path": request.url.path, "method": request.method, "status": response.status_code},
        )
        return response

    @app.middleware("http")
    async def request_id_middleware(request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    configure_telemetry(app, settings)
    return app


app = create_app()
