from datetime import datetime
from decimal import Decimal

from sqlalchemy import (Boolean, DateTime, ForeignKey, Index, Integer,
                        Numeric, String, Text)
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.database import Base
from src.infrastructure.persistence.models.mixins import (IntegerIdMixin,
                                                          TimestampMixin)


class Event(IntegerIdMixin, TimestampMixin, Base):
    """
    A dated, priced happening, optionally held at a venue.

    Inherits from:
        - IntegerIdMixin: autoincrement primary key
        - TimestampMixin: created_at / updated_at

    Note: venue_id is RESTRICT on delete, so a venue cannot disappear
    from under its events even if the service-level check is bypassed.
    name_key holds the case-folded name and is written by the repository.
    """

    __tablename__ = "event"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_key: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    event_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ticket_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    venue_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("venue.id", ondelete="RESTRICT"), index=True
    )
    capacity: Mapped[int | None] = mapped_column(Integer)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("uq_event_name_key", "name_key", unique=True),
        Index("ix_event_active_date", "active", "event_date"),
    )
