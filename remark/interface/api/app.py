"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from remark.config import Settings
from remark.interface.api.routes import comments, health
from remark.interface.error import register_exception_handlers
from remark.util.di.container import create_container, setup_di
from remark.util.observability import instrument_fastapi


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Remark API",
        description="Threaded comments for tutorials and courses",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    register_exception_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
