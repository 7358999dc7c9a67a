"""
Folio - FastAPI Backend
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from folio import __version__
from folio.config import Settings, get_settings
from folio.errors import CorruptionError, FolioError, IntegrityViolation, IOFailure, NotFoundError
from folio.logging import setup_logging, get_logger
from folio.routers import documents, folders, trash
from folio.services.store import DocumentStore
from folio.services.trash import TrashService
from folio.services.trash_sweeper import TrashSweeper

logger = get_logger('main')

_ERROR_STATUS = (
    (NotFoundError, 404),
    (IntegrityViolation, 409),
    (CorruptionError, 422),
    (IOFailure, 503),
)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(FolioError)
    async def handle_storage_error(request: Request, exc: FolioError):
        status = 500
        for error_type, error_status in _ERROR_STATUS:
            if isinstance(exc, error_type):
                status = error_status
                break
        if status >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=status,
            content={"error": {"code": exc.code, "message": exc.message, "details": exc.context}},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.DEBUG)
        logger.info("Starting Folio API")

        root = Path(settings.STORAGE_ROOT)
        app.state.trash = TrashService(root, durable=settings.DURABLE_WRITES)
        app.state.store = DocumentStore(
            root,
            trash=app.state.trash,
            durable=settings.DURABLE_WRITES,
            default_template=settings.DEFAULT_PAGE_TEMPLATE,
        )
        app.state.sweeper = TrashSweeper(
            app.state.trash,
            retention_days=lambda: settings.TRASH_RETENTION_DAYS,
            interval_seconds=settings.TRASH_SWEEP_INTERVAL_SECONDS,
        )
        app.state.sweeper.start()
        logger.info(f"Storage opened at {root}")

        yield

        logger.info("Shutting down application")
        await app.state.sweeper.stop()

    app = FastAPI(
        title="Folio API",
        description="Hierarchical note storage with crash-safe writes and a recoverable trash",
        version=__version__,
        lifespan=lifespan
    )

    register_error_handlers(app)

    app.include_router(documents.router, prefix="/api/documents", tags=["Documents"])
    app.include_router(folders.router, prefix="/api/folders", tags=["Folders"])
    app.include_router(trash.router, prefix="/api/trash", tags=["Trash"])

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "service": "folio",
            "trash_sweeper_running": app.state.sweeper.is_running if hasattr(app.state, 'sweeper') else False,
        }

    @app.get("/")
    async def root():
        return {
            "name": "Folio API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health"
        }

    return app
