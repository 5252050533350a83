"""
Sales Dashboard: FastAPI app factory with an empty in-memory dataset.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import CORS_ORIGINS, configure_logging
from app.data.errors import IngestError
from app.data.store import DataStore
from app.api.dependencies import set_store
from app.api.router_meta import router as meta_router
from app.api.router_sales import router as sales_router
from app.api.router_upload import router as upload_router
from app.api.router_dashboard import router as dashboard_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start with an empty dataset; uploads fill it."""
    set_store(DataStore())
    logger.info("Sales Dashboard ready. No data yet, upload a CSV or Excel export.")
    yield
    set_store(None)


def _describe(err: dict) -> str:
    """One-line summary of a FastAPI validation error, e.g. "pageSize: Input should be..."."""
    where = ".".join(str(p) for p in err.get("loc", ()) if p not in ("query", "body"))
    return f"{where}: {err.get('msg', 'invalid value')}"


def register_error_handlers(app: FastAPI) -> None:
    """Every failure renders as {error, kind}."""

    @app.exception_handler(IngestError)
    async def ingest_error(request: Request, exc: IngestError):
        logger.warning("%s %s rejected (%s): %s", request.method, request.url.path, exc.kind, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message, "kind": exc.kind})

    @app.exception_handler(RequestValidationError)
    async def request_error(request: Request, exc: RequestValidationError):
        problems = "; ".join(_describe(err) for err in exc.errors())
        return JSONResponse(status_code=422, content={"error": problems or "Invalid request", "kind": "validation"})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail), "kind": "http"})

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("%s %s failed", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error", "kind": "internal"})


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Sales Dashboard API",
        description="Retail sales upload, filtering, metrics, and exports",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(meta_router)
    app.include_router(upload_router)
    app.include_router(sales_router)
    app.include_router(dashboard_router)

    # Serve a built dashboard if one is bundled next to the package
    static_dir = Path(__file__).parent / "static"
    if static_dir.is_dir():
        index_html = static_dir / "index.html"

        @app.get("/", response_class=HTMLResponse)
        async def serve_index():
            return HTMLResponse(
                content=index_html.read_text(),
                headers={"Cache-Control": "no-cache, no-store, must-revalidate", "Pragma": "no-cache"},
            )

        app.mount("/", StaticFiles(directory=str(static_dir)), name="static")

    return app


app = create_app()
