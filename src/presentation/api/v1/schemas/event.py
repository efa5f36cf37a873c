from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import Field, PlainSerializer

from src.domain.entities import EventDraft, EventEntity, EventPatch
from src.presentation.api.v1.schemas.common import CamelModel

# Prices travel as JSON numbers
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class EventCreate(CamelModel):
    name: str = Field(..., min_length=3, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    event_date: datetime
    venue_id: int | None = Field(default=None, gt=0)
    capacity: int | None = Field(default=None, gt=0, le=100_000)
    ticket_price: Decimal = Field(..., ge=0, le=10_000_000, decimal_places=2)
    active: bool | None = None

    def to_draft(self) -> EventDraft:
        return EventDraft(**self.model_dump())


class EventUpdate(CamelModel):
    """Partial update. Absent and null fields keep their stored value."""

    name: str | None = Field(default=None, min_length=3, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    event_date: datetime | None = None
    venue_id: int | None = Field(default=None, gt=0)
    capacity: int | None = Field(default=None, gt=0, le=100_000)
    ticket_price: Decimal | None = Field(default=None, ge=0, le=10_000_000, decimal_places=2)
    active: bool | None = None

    def to_patch(self) -> EventPatch:
        return EventPatch(**self.model_dump(exclude_none=True))


class EventResponse(CamelModel):
    id: int
    name: str
    description: str | None = None
    event_date: datetime
    venue_id: int | None = None
    capacity: int | None = None
    ticket_price: Money
    active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, event: EventEntity) -> "EventResponse":
        return cls.model_validate(event)
