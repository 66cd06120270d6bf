"""Pydantic models for dependency ordering."""

from pydantic import BaseModel, ConfigDict, Field


class DependencyEdge(BaseModel):
    """The dependent object's definition mentions the referenced object."""

    model_config = ConfigDict(frozen=True)

    dependent: str = Field(
        ..., description="Name of the object that holds the reference"
    )
    referenced: str = Field(..., description="Name of the object being referenced")

    @property
    def is_self_reference(self) -> bool:
        return self.dependent.casefold() == self.referenced.casefold()


class DanglingEdge(BaseModel):
    """An edge skipped because one of its ends is not in the exported set."""

    edge: DependencyEdge
    reason: str = Field(..., description="Human readable reason the edge was skipped")
