"""
Main entrypoint for the Tour of Schools mock backend.

This module assembles the FastAPI application, sets up logging and
includes the API router.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app`` so it can be served directly, e.g.::

    uvicorn tour_of_schools_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

from typing import Dict

from fastapi import FastAPI

from .core.config import settings
from .core.logging_config import setup_logging
from .api.router import router as api_router


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI instance with the schools resource mounted
        under ``/api``.
    """
    # Logging first so that router imports can log safely.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.include_router(api_router, prefix="/api")

    @app.get("/health", include_in_schema=False)
    async def health_check() -> Dict[str, str]:
        return {
            "status": "healthy",
            "service": settings.project_name,
            "version": settings.api_version,
        }

    return app


app = create_app()
