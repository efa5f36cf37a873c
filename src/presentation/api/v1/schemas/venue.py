from datetime import datetime

from pydantic import Field

from src.domain.entities import VenueDraft, VenueEntity, VenuePatch
from src.presentation.api.v1.schemas.common import CamelModel


class VenueCreate(CamelModel):
    name: str = Field(..., min_length=3, max_length=100)
    address: str = Field(..., min_length=5, max_length=200)
    city: str = Field(..., min_length=2, max_length=100)
    country: str | None = Field(default=None, min_length=2, max_length=100)
    max_capacity: int = Field(..., gt=0, le=500_000)
    type: str | None = Field(default=None, max_length=50)
    available: bool | None = None

    def to_draft(self) -> VenueDraft:
        return VenueDraft(**self.model_dump())


class VenueUpdate(CamelModel):
    """Partial update. Absent and null fields keep their stored value."""

    name: str | None = Field(default=None, min_length=3, max_length=100)
    address: str | None = Field(default=None, min_length=5, max_length=200)
    city: str | None = Field(default=None, min_length=2, max_length=100)
    country: str | None = Field(default=None, min_length=2, max_length=100)
    max_capacity: int | None = Field(default=None, gt=0, le=500_000)
    type: str | None = Field(default=None, max_length=50)
    available: bool | None = None

    def to_patch(self) -> VenuePatch:
        return VenuePatch(**self.model_dump(exclude_none=True))


class VenueResponse(CamelModel):
    id: int
    name: str
    address: str
    city: str
    country: str | None = None
    max_capacity: int | None = None
    type: str | None = None
    available: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, venue: VenueEntity) -> "VenueResponse":
        return cls.model_validate(venue)
