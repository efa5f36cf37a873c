from sqlalchemy import Boolean, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.database import Base
from src.infrastructure.persistence.models.mixins import (IntegerIdMixin,
                                                          TimestampMixin)


class Venue(IntegerIdMixin, TimestampMixin, Base):
    """
    A place that can host events.

    Names are unique regardless of case; the unique index on name_key
    makes the database the final arbiter when two writers race on the
    same name. The *_key columns hold case-folded copies for lookups.
    """

    __tablename__ = "venue"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_key: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    city_key: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    country: Mapped[str | None] = mapped_column(String(100))
    country_key: Mapped[str | None] = mapped_column(String(100))
    max_capacity: Mapped[int | None] = mapped_column(Integer)
    type: Mapped[str | None] = mapped_column(String(50))
    type_key: Mapped[str | None] = mapped_column(String(50))
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    __table_args__ = (Index("uq_venue_name_key", "name_key", unique=True),)
