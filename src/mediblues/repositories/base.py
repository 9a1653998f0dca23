"""
Generic CRUD Repository.

Shared data-access operations for every directory entity. Subclasses
declare the model, which fields are required, which must be unique and
which foreign keys must point at existing rows; the base class enforces
those rules on create and partial update.

Repositories never commit. They flush inside the per-request session so
that a parent write and its association replacement commit together.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import Column, Table, delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption
from sqlalchemy.sql.elements import ColumnElement

from ..core.exceptions import ConflictError, NotFoundError, ReferentialError, ValidationError
from ..db.session import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

_AUDIT_COLUMNS = frozenset({"id", "created_at", "updated_at"})


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def dedupe(ids: Iterable[int]) -> list[int]:
    """Drop repeated ids, keeping first-seen order."""
    seen: set[int] = set()
    ordered: list[int] = []
    for item in ids:
        if item not in seen:
            seen.add(item)
            ordered.append(item)
    return ordered


class CrudRepository(Generic[ModelT]):
    """Base repository with validated create/update/delete and list queries."""

    model: ClassVar[type[Base]]
    resource_name: ClassVar[str] = "Resource"
    required_fields: ClassVar[tuple[str, ...]] = ()
    unique_fields: ClassVar[tuple[str, ...]] = ()
    # field name -> referenced model, checked on create/update
    references: ClassVar[dict[str, type[Base]]] = {}
    # loader options applied to single-row reads and write results
    default_options: ClassVar[tuple[ORMOption, ...]] = ()

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # ==========================================================================
    # Reads
    # ==========================================================================

    async def find_all(
        self,
        *where: ColumnElement[bool],
        options: Sequence[ORMOption] = (),
        order_by: Sequence[Any] = (),
        limit: int | None = None,
        offset: int | None = None,
    ) -> Sequence[ModelT]:
        """Return rows matching ``where`` in the requested order."""
        stmt = select(self.model).where(*where).options(*options).order_by(*order_by)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().unique().all()

    async def count(self, *where: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(self.model).where(*where)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_page(
        self,
        *where: ColumnElement[bool],
        options: Sequence[ORMOption] = (),
        order_by: Sequence[Any] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[Sequence[ModelT], int]:
        """Return one page of rows plus the total number of matching rows."""
        total = await self.count(*where)
        rows = await self.find_all(
            *where,
            options=options,
            order_by=order_by,
            limit=limit,
            offset=offset,
        )
        return rows, total

    async def find_by_key(
        self,
        key: int,
        options: Sequence[ORMOption] | None = None,
    ) -> ModelT | None:
        """Get a row by primary key, reloading eager relations."""
        stmt = (
            select(self.model)
            .where(self.model.id == key)
            .options(*(self.default_options if options is None else options))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().unique().one_or_none()

    async def get_or_raise(
        self,
        key: int,
        options: Sequence[ORMOption] | None = None,
    ) -> ModelT:
        """Get a row by primary key or raise NotFoundError."""
        row = await self.find_by_key(key, options=options)
        if row is None:
            raise self._not_found(key)
        return row

    async def exists(self, model: type[Base], key: int) -> bool:
        result = await self.session.execute(select(model.id).where(model.id == key))
        return result.first() is not None

    # ==========================================================================
    # Writes
    # ==========================================================================

    async def create(self, fields: Mapping[str, Any]) -> ModelT:
        """
        Validate and insert a new row.

        Raises:
            ValidationError: a required field is missing or blank, or a field is unknown
            ReferentialError: a referenced row does not exist
            ConflictError: a unique field is already taken
        """
        values = self._writable(fields)
        missing = [name for name in self.required_fields if _is_blank(values.get(name))]
        if missing:
            raise ValidationError(
                message=f"{', '.join(missing)} {'is' if len(missing) == 1 else 'are'} required",
                fields=missing,
            )
        await self._check_references(values)
        await self._check_unique(values)

        row = self.model(**values)
        self.session.add(row)
        await self._flush()
        logger.info(f"Created {self.resource_name.lower()}: id={row.id}")
        return await self.get_or_raise(row.id)

    async def update(self, key: int, fields: Mapping[str, Any]) -> ModelT:
        """
        Apply a partial update: only keys present in ``fields`` change.

        An explicit ``None`` clears a nullable column; on a required column
        it is a ValidationError.
        """
        row = await self.get_or_raise(key, options=())
        values = self._writable(fields)

        blank = [
            name
            for name, value in values.items()
            if _is_blank(value) and (name in self.required_fields or not self._nullable(name))
        ]
        if blank:
            raise ValidationError(
                message=f"{', '.join(blank)} cannot be empty",
                fields=blank,
            )
        await self._check_references(values)
        await self._check_unique(values, exclude_id=key)

        for name, value in values.items():
            setattr(row, name, value)
        await self._flush()
        logger.info(f"Updated {self.resource_name.lower()}: id={key}, fields={sorted(values)}")
        return await self.get_or_raise(key)

    async def delete(self, key: int) -> None:
        """Delete a row; dependent rows go through database cascades."""
        result = await self.session.execute(
            delete(self.model).where(self.model.id == key)
        )
        if not result.rowcount:
            raise self._not_found(key)
        logger.info(f"Deleted {self.resource_name.lower()}: id={key}")

    async def replace_associations(
        self,
        junction: Table,
        parent_id: int,
        child_model: type[Base],
        child_ids: Iterable[int],
    ) -> list[int]:
        """
        Replace the full set of junction rows linking ``parent_id`` to children.

        Requested ids are de-duplicated (first-seen order kept) and filtered
        to ids that exist in the child table; unknown ids are dropped
        silently. Every existing link of the parent is deleted, then one
        row per surviving id is inserted.

        Returns:
            The child ids that are now linked, in request order.
        """
        parent_col, child_col = self._junction_columns(junction, child_model)
        requested = dedupe(child_ids)

        valid: list[int] = []
        if requested:
            result = await self.session.execute(
                select(child_model.id).where(child_model.id.in_(requested))
            )
            existing = set(result.scalars().all())
            valid = [child_id for child_id in requested if child_id in existing]

        await self.session.execute(delete(junction).where(parent_col == parent_id))
        if valid:
            await self.session.execute(
                insert(junction),
                [{parent_col.key: parent_id, child_col.key: child_id} for child_id in valid],
            )
        dropped = len(requested) - len(valid)
        if dropped:
            logger.info(
                f"Skipped {dropped} unknown {child_model.__name__.lower()} id(s) "
                f"for {self.resource_name.lower()} {parent_id}"
            )
        return valid

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _not_found(self, key: int) -> NotFoundError:
        return NotFoundError(
            message=f"{self.resource_name} not found",
            resource_type=self.resource_name.lower(),
            resource_id=key,
        )

    def _writable(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        columns = {column.key for column in self.model.__table__.columns} - _AUDIT_COLUMNS
        unknown = sorted(set(fields) - columns)
        if unknown:
            raise ValidationError(message=f"Unknown field(s): {', '.join(unknown)}", fields=unknown)
        return dict(fields)

    def _nullable(self, name: str) -> bool:
        return bool(self.model.__table__.columns[name].nullable)

    async def _check_references(self, values: Mapping[str, Any]) -> None:
        for name, target in self.references.items():
            value = values.get(name)
            if value is not None and not await self.exists(target, value):
                raise ReferentialError(resource_type=target.__name__.lower(), resource_id=value)

    async def _check_unique(self, values: Mapping[str, Any], exclude_id: int | None = None) -> None:
        for name in self.unique_fields:
            if name not in values:
                continue
            column = getattr(self.model, name)
            stmt = select(self.model.id).where(column == values[name])
            if exclude_id is not None:
                stmt = stmt.where(self.model.id != exclude_id)
            result = await self.session.execute(stmt)
            if result.first() is not None:
                raise ConflictError(
                    message=f"{self.resource_name} with {name} '{values[name]}' already exists",
                    details={"field": name, "value": values[name]},
                )

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            text = str(exc.orig).lower()
            if "unique" in text or "duplicate" in text:
                raise ConflictError(message=f"{self.resource_name} already exists") from exc
            raise ReferentialError(
                resource_type=self.resource_name.lower(),
                message=f"{self.resource_name} references a row that does not exist",
            ) from exc

    def _junction_columns(self, junction: Table, child_model: type[Base]) -> tuple[Column, Column]:
        parent_table = self.model.__table__
        child_table = child_model.__table__
        parent_col = child_col = None
        for column in junction.columns:
            for fk in column.foreign_keys:
                if fk.column.table is parent_table:
                    parent_col = column
                elif fk.column.table is child_table:
                    child_col = column
        if parent_col is None or child_col is None:
            raise ValueError(
                f"{junction.name} does not link {parent_table.name} to {child_table.name}"
            )
        return parent_col, child_col
