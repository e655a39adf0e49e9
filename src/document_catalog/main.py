"""Main FastAPI application for Document Catalog."""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .config.settings import get_settings, Settings
from .infrastructure.database.store import TableStore
from .core.activity_manager import ActivityManager
from .core.category_manager import CategoryManager
from .core.document_manager import DocumentManager
from .core.favorites_manager import FavoritesManager
from .core.initial_data import InitialDataLoader
from .core.session_manager import SessionManager
from .api.responses import failure
from .api.routes import activity, catalog, documents, favorites, sessions
from .exceptions import ValidationError
from .models.requests import HealthResponse

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def build_managers(app: FastAPI, store: TableStore, settings: Settings):
    """Wire the managers around one store handle and expose them on app.state."""
    activity_mgr = ActivityManager(store, recent_limit=settings.recent_activity_limit)
    registry = CategoryManager(store, activity_mgr)
    favorites_mgr = FavoritesManager(store, activity_mgr)
    documents_mgr = DocumentManager(
        store, registry, favorites_mgr, activity_mgr, max_results=settings.max_search_results
    )
    sessions_mgr = SessionManager(store, timeout_minutes=settings.session_timeout_minutes)

    app.state.store = store
    app.state.activity = activity_mgr
    app.state.registry = registry
    app.state.favorites = favorites_mgr
    app.state.documents = documents_mgr
    app.state.sessions = sessions_mgr
    app.state.initial_data = InitialDataLoader(
        documents_mgr, registry, favorites_mgr, activity_mgr, sessions_mgr,
        app_name=settings.app_name, version=settings.version,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application for the given settings (defaults to the environment)."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        logger.info(f"Starting {settings.service_name} v{settings.version}")

        logger.info("Initializing table store...")
        store = TableStore(settings.database_url)
        await store.initialize()
        build_managers(app, store, settings)

        await app.state.sessions.start_sweep_task(settings.session_sweep_interval_seconds)
        logger.info(f"{settings.service_name} is ready")

        yield

        # Cleanup
        logger.info("Shutting down...")
        await app.state.sessions.stop_sweep_task()
        await store.close()
        logger.info("Shutdown complete")

    app = FastAPI(
        title="Document Catalog",
        description="Shared catalog of externally hosted documents with categories, tags, "
                    "favorites, activity feed and online presence",
        version=settings.version,
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report malformed requests through the regular result envelope."""
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}"
            for error in exc.errors()
        )
        return failure(ValidationError(problems or "Invalid request"))

    # Include routers
    app.include_router(documents.router)
    app.include_router(catalog.router)
    app.include_router(favorites.router)
    app.include_router(sessions.router)
    app.include_router(activity.router)

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        """Health check endpoint."""
        store = getattr(request.app.state, "store", None)
        db_connected = store is not None and await store.ping()

        return HealthResponse(
            status="healthy" if db_connected else "degraded",
            service=settings.service_name,
            version=settings.version,
            database_connected=db_connected,
            details={"session_timeout_minutes": settings.session_timeout_minutes},
        )

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": settings.service_name,
            "version": settings.version,
            "status": "running"
        }

    return app


configure_logging(get_settings())
app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "document_catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=True
    )
