"""Generic async data-access layer shared by the entity repositories."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.library.core.errors import RecordNotFoundError, ValidationViolationError
from src.library.core.validation import EntitySchema, RuleKind, validate

from ._base import Entity, EntityTable, utcnow

EntityT = TypeVar("EntityT", bound=Entity)
TableT = TypeVar("TableT", bound=EntityTable)


class EntityRepository(Generic[EntityT, TableT]):
    """Create, read, update and delete one entity type.

    Every write is validated against ``schema`` before it reaches the store and
    runs as a single transaction. Callers receive detached domain entities,
    never the table rows themselves.
    """

    schema: ClassVar[EntitySchema]
    entity_type: ClassVar[type[Entity]]
    table_type: ClassVar[type[EntityTable]]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, record: Mapping[str, Any]) -> EntityT:
        validate(self.schema, record)
        row = self.table_type(**self._writable(record))
        self._session.add(row)
        await self._commit()
        logger.info("Created {} {}", self.schema.entity, row.id)
        return self._to_entity(row)

    async def get(self, entity_id: str) -> EntityT:
        return self._to_entity(await self._get_row(entity_id))

    async def list_all(self) -> list[EntityT]:
        statement = select(self.table_type).order_by(self.table_type.created_at)
        rows = (await self._session.exec(statement)).all()
        return [self._to_entity(row) for row in rows]

    async def update(self, entity_id: str, changes: Mapping[str, Any]) -> EntityT:
        row = await self._get_row(entity_id)
        validate(self.schema, changes, partial=True)
        values = self._writable(changes)
        for name, value in values.items():
            setattr(row, name, value)
        row.updated_at = utcnow()
        self._session.add(row)
        await self._commit()
        logger.info("Updated {} {} fields={}", self.schema.entity, entity_id, sorted(values))
        return self._to_entity(row)

    async def delete(self, entity_id: str) -> None:
        row = await self._get_row(entity_id)
        await self._session.delete(row)
        await self._commit()
        logger.info("Deleted {} {}", self.schema.entity, entity_id)

    async def _get_row(self, entity_id: str) -> TableT:
        row = await self._session.get(self.table_type, entity_id)
        if row is None:
            raise RecordNotFoundError(self.schema.entity, entity_id)
        return row

    def _writable(self, record: Mapping[str, Any]) -> dict[str, Any]:
        """Keep declared client fields; drop ids, timestamps and unknown keys."""
        return {
            spec.name: record[spec.name]
            for spec in self.schema.writable_fields
            if spec.name in record
        }

    async def _commit(self) -> None:
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            error = self._constraint_error(exc)
            if error is None:
                raise
            raise error from exc
        except Exception:
            await self._session.rollback()
            raise

    def _constraint_error(
        self, exc: IntegrityError
    ) -> ValidationViolationError | None:
        """Map a store constraint failure onto the schema's uniqueness rules."""
        candidates = self.schema.unique_fields()
        if not candidates:
            return None
        detail = str(exc.orig)
        spec = next((s for s in candidates if s.name in detail), candidates[0])
        rule = spec.rule(RuleKind.UNIQUE)
        logger.warning(
            "Rejected {} write on unique field '{}'", self.schema.entity, spec.name
        )
        return ValidationViolationError(self.schema.entity, spec.name, rule.message)

    def _to_entity(self, row: EntityTable) -> EntityT:
        return self.entity_type.model_validate(row, from_attributes=True)
