"""
Pydantic models for school data.

``SchoolBase`` carries the only mutable field, ``name``.
``SchoolCreate`` is the POST body (the server assigns the id) and
``SchoolRead`` is both the response model and the PUT body, since an
update replaces the whole record keyed by its id.
"""

from pydantic import BaseModel, Field, field_validator


class SchoolBase(BaseModel):
    name: str = Field(..., examples=["Magneta"])

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


class SchoolCreate(SchoolBase):
    """Schema for creating a school."""


class SchoolRead(SchoolBase):
    """Schema for reading or replacing a school."""

    id: int

    model_config = {
        "from_attributes": True,
    }
