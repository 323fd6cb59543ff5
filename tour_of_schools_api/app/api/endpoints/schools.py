"""
School endpoints.

These routes implement the REST contract consumed by the client:
listing (with ``name`` and ``id`` query filters), fetching by id,
creation, whole‑record replacement and deletion.  Routes are
registered with an empty path so that the collection is served at
``/api/schools`` without a trailing‑slash redirect.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from tour_of_schools_api.app.schemas.school import SchoolCreate, SchoolRead
from tour_of_schools_api.app.services.school_service import SchoolService


router = APIRouter()


@router.get("", response_model=List[SchoolRead])
async def list_schools(
    name: Optional[str] = Query(None),
    school_id: Optional[int] = Query(None, alias="id"),
) -> List[SchoolRead]:
    """List schools.

    - **name** — keep schools whose name contains the term (case insensitive).
    - **id** — keep the school with this id; the result has 0 or 1 entries.
    """
    return await SchoolService.list_schools(name=name, school_id=school_id)


@router.get("/{school_id}", response_model=SchoolRead)
async def get_school(school_id: int) -> SchoolRead:
    """Retrieve a single school.  Raises 404 if the school is not found."""
    try:
        return await SchoolService.get_school(school_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("", response_model=SchoolRead, status_code=status.HTTP_201_CREATED)
async def create_school(school: SchoolCreate) -> SchoolRead:
    """Create a school; the id is assigned by the server."""
    return await SchoolService.create_school(school)


@router.put("", status_code=status.HTTP_204_NO_CONTENT)
async def update_school(school: SchoolRead) -> Response:
    """Replace the school identified by ``id`` in the body."""
    try:
        await SchoolService.update_school(school)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{school_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_school(school_id: int) -> Response:
    try:
        await SchoolService.delete_school(school_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
