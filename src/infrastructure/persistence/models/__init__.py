from src.infrastructure.persistence.models.event import Event
# Mixins for model composition
from src.infrastructure.persistence.models.mixins import (IntegerIdMixin,
                                                          TimestampMixin)
from src.infrastructure.persistence.models.venue import Venue

__all__ = [
    # Models
    "Venue",
    "Event",
    # Mixins
    "IntegerIdMixin",
    "TimestampMixin",
]
