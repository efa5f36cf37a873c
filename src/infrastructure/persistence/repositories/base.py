from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, delete, exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.exceptions import DuplicateResourceException
from src.domain.value_objects.pagination import Page, PageRequest
from src.infrastructure.exceptions import StoreConflictException
from src.infrastructure.persistence.database import Base
from src.shared.telemetry.logging import get_logger
from src.shared.utils.text import fold_case

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)
EntityType = TypeVar("EntityType")
FilterType = TypeVar("FilterType")

_UNIQUE_MARKERS = ("unique", "duplicate key")


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a unique-index violation apart from other constraint failures"""
    if getattr(exc.orig, "sqlstate", None) == "23505":
        return True
    message = str(exc.orig).lower()
    return any(marker in message for marker in _UNIQUE_MARKERS)


class BaseRepository(ABC, Generic[ModelType, EntityType, FilterType]):
    """
    Base repository implementing common store operations (LSP).

    Subclasses map rows to domain entities and turn filter objects into
    WHERE clauses; everything else (lookups, existence checks, paging,
    constraint translation) lives here.
    """

    resource_type: str = "Resource"

    def __init__(self, db: AsyncSession, model: type[ModelType]):
        self.db = db
        self.model = model

    @abstractmethod
    def _to_entity(self, obj: ModelType) -> EntityType:
        """Map an ORM row to its domain entity"""

    @abstractmethod
    def _conditions(self, criteria: FilterType) -> list[ColumnElement[bool]]:
        """WHERE clauses for a filter object"""

    @contextmanager
    def _translate_integrity_errors(self, name: str | None = None) -> Iterator[None]:
        """
        Re-raise constraint failures as domain/store exceptions.

        The session is unusable afterwards; the surrounding transaction
        is rolled back by whoever owns it.
        """
        try:
            yield
        except IntegrityError as exc:
            if is_unique_violation(exc) and name is not None:
                logger.warning("Unique constraint rejected %s name %r", self.resource_type, name)
                raise DuplicateResourceException(self.resource_type, name) from exc
            logger.warning("Constraint rejected %s write: %s", self.resource_type, exc.orig)
            raise StoreConflictException(
                f"{self.resource_type} could not be written because of a conflicting change"
            ) from exc

    async def _get_model(self, id: int) -> ModelType | None:
        # Cast to Any for SQLAlchemy dynamic attribute access (id comes from IntegerIdMixin)
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == id))
        return result.scalar_one_or_none()

    async def get_by_id(self, id: int) -> EntityType | None:
        """Get a single record by ID"""
        obj = await self._get_model(id)
        return self._to_entity(obj) if obj is not None else None

    async def exists_by_id(self, id: int) -> bool:
        model: Any = self.model
        result = await self.db.execute(select(exists().where(model.id == id)))
        return bool(result.scalar())

    async def exists_by_name(self, name: str) -> bool:
        """Case-insensitive name lookup against the folded name_key column"""
        model: Any = self.model
        result = await self.db.execute(
            select(exists().where(model.name_key == fold_case(name)))
        )
        return bool(result.scalar())

    async def _insert(self, obj: ModelType, name: str) -> EntityType:
        self.db.add(obj)
        with self._translate_integrity_errors(name):
            await self.db.flush()
        return self._to_entity(obj)

    async def _flush_update(self, obj: ModelType, name: str) -> EntityType:
        with self._translate_integrity_errors(name):
            await self.db.flush()
        return self._to_entity(obj)

    async def delete_by_id(self, id: int) -> bool:
        """Delete a record, returning False when nothing matched"""
        model: Any = self.model
        with self._translate_integrity_errors():
            result = await self.db.execute(delete(self.model).where(model.id == id))
        return result.rowcount > 0

    async def list_all(self) -> list[EntityType]:
        model: Any = self.model
        result = await self.db.execute(select(self.model).order_by(model.id))
        return [self._to_entity(obj) for obj in result.scalars().all()]

    async def find(self, criteria: FilterType) -> list[EntityType]:
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(*self._conditions(criteria)).order_by(model.id)
        )
        return [self._to_entity(obj) for obj in result.scalars().all()]

    async def search(self, criteria: FilterType, page: PageRequest) -> Page[EntityType]:
        """One sorted page plus the total match count; ties are broken by id"""
        model: Any = self.model
        conditions = self._conditions(criteria)

        total_result = await self.db.execute(
            select(func.count()).select_from(self.model).where(*conditions)
        )
        total = total_result.scalar_one()

        sort_column = getattr(model, page.sort_by)
        id_column = model.id
        order = (
            (sort_column.desc().nulls_last(), id_column.desc())
            if page.descending
            else (sort_column.asc().nulls_first(), id_column.asc())
        )
        result = await self.db.execute(
            select(self.model)
            .where(*conditions)
            .order_by(*order)
            .offset(page.offset)
            .limit(page.size)
        )
        items = [self._to_entity(obj) for obj in result.scalars().all()]
        return Page.of(items, page, total)
