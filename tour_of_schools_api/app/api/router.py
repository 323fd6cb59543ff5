"""
Top‑level router of the API.

Aggregates resource routers under a unified prefix.  The application
mounts it under ``/api``.
"""

from fastapi import APIRouter

from .endpoints import schools

router = APIRouter()

router.include_router(schools.router, prefix="/schools", tags=["schools"])
