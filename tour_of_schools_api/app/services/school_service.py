"""
Business logic for schools.

The ``SchoolService`` keeps the collection in process memory and seeds
it with ten schools on import.  It plays the role of a mock REST
backend: data survives for the lifetime of the process only and is
restored with :meth:`SchoolService.reset`.
"""

import logging
from typing import Dict, List, Optional

from ..schemas.school import SchoolCreate, SchoolRead


logger = logging.getLogger(__name__)

SEED_SCHOOLS: List[Dict[str, object]] = [
    {"id": 11, "name": "Mr. Nice"},
    {"id": 12, "name": "Narco"},
    {"id": 13, "name": "Bombasto"},
    {"id": 14, "name": "Celeritas"},
    {"id": 15, "name": "Magneta"},
    {"id": 16, "name": "RubberMan"},
    {"id": 17, "name": "Dynama"},
    {"id": 18, "name": "Dr IQ"},
    {"id": 19, "name": "Magma"},
    {"id": 20, "name": "Tornado"},
]

# Id handed out when the collection is empty.
FIRST_ID = 11


class SchoolService:
    """In‑memory storage for the ``/api/schools`` resource.

    Records are kept in insertion order, which is also the order in
    which they are listed.  Lookups raise ``ValueError`` when the id is
    unknown; the endpoints translate that into a 404.
    """

    _schools: List[SchoolRead] = []

    @classmethod
    def reset(cls) -> None:
        """Restore the seed collection."""
        cls._schools = [SchoolRead(**row) for row in SEED_SCHOOLS]

    @classmethod
    def _genid(cls) -> int:
        if not cls._schools:
            return FIRST_ID
        return max(school.id for school in cls._schools) + 1

    @classmethod
    def _find(cls, school_id: int) -> Optional[SchoolRead]:
        for school in cls._schools:
            if school.id == school_id:
                return school
        return None

    @classmethod
    async def list_schools(
        cls,
        name: Optional[str] = None,
        school_id: Optional[int] = None,
    ) -> List[SchoolRead]:
        """Return schools, optionally filtered.

        - ``name`` keeps schools whose name contains the term, ignoring case.
        - ``school_id`` keeps the school with that id (zero or one result).
        """
        schools = list(cls._schools)
        if name:
            term = name.lower()
            schools = [s for s in schools if term in s.name.lower()]
        if school_id is not None:
            schools = [s for s in schools if s.id == school_id]
        return schools

    @classmethod
    async def get_school(cls, school_id: int) -> SchoolRead:
        school = cls._find(school_id)
        if not school:
            raise ValueError(f"School {school_id} not found")
        return school

    @classmethod
    async def create_school(cls, data: SchoolCreate) -> SchoolRead:
        """Append a new school and return it with its assigned id."""
        school = SchoolRead(id=cls._genid(), name=data.name)
        cls._schools.append(school)
        logger.info("Created school %s '%s'", school.id, school.name)
        return school

    @classmethod
    async def update_school(cls, data: SchoolRead) -> SchoolRead:
        """Replace the school with the same id.

        The record keeps its position in the collection.  Raises
        ``ValueError`` if no school has that id.
        """
        for index, school in enumerate(cls._schools):
            if school.id == data.id:
                cls._schools[index] = SchoolRead(id=data.id, name=data.name)
                logger.info("Updated school %s", data.id)
                return cls._schools[index]
        raise ValueError(f"School {data.id} not found")

    @classmethod
    async def delete_school(cls, school_id: int) -> None:
        school = cls._find(school_id)
        if not school:
            raise ValueError(f"School {school_id} not found")
        cls._schools.remove(school)
        logger.info("Deleted school %s", school_id)


SchoolService.reset()
