"""Pydantic schemas for service inputs."""

from pydantic import BaseModel, ConfigDict, Field


class AuthorReference(BaseModel):
    """Reference to an existing author by id.

    Built from plain input (``AuthorReference(id=10)``) or from any object
    carrying an ``id`` attribute, including ``models.Author`` rows.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int = Field(gt=0)
