"""Generic paginated list/filter/sort query engine shared by every entity.

Invariants:
- Every list query orders by exactly two keys (requested or default, then a tiebreak).
- Each list is one SELECT carrying a window count; a separate COUNT runs only for empty pages.
- Relation exclusion is a parameterised NOT IN subquery evaluated by the database.
- Storage failures are logged and re-raised as InternalError without detail.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, NoReturn, Sequence, TypeVar

from sqlalchemy import Select, delete, func, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.config import settings
from gallery.core.errors import InternalError, NotFoundError, ValidationError
from gallery.db.base_class import Base
from gallery.query.filters import build_filter
from gallery.query.pagination import MAX_OFFSET, check_offset, non_negative_int
from gallery.query.sorting import SortDirection, SortKey, resolve_sort

logger = logging.getLogger("gallery.services.entity_engine")

ModelT = TypeVar("ModelT", bound=Base)
SortRequest = tuple[str | None, SortDirection | str | None]


@dataclass(frozen=True, slots=True)
class Association:
    """Link from an entity to a related entity through a join table."""
    through: type[Base]
    local_key: str
    remote_key: str
    related_label: str


@dataclass(frozen=True, slots=True)
class EntityDescriptor:
    """Declarative description of how one entity is filtered, sorted, and joined.

    `fields` maps public (API) field names to model attribute names; filter,
    sort, and tiebreak names all use the public names.
    """
    model: type[Base]
    label: str
    plural: str
    fields: Mapping[str, str]
    filter_fields: tuple[str, ...]
    default_sort: SortKey
    sortable_fields: tuple[str, ...] = ()
    pattern_fields: tuple[str, ...] = ()
    tiebreak: str = "title"
    associations: Mapping[str, Association] = field(default_factory=dict)

    def column(self, name: str) -> Any:
        return getattr(self.model, self.fields.get(name, name))

    def filter_columns(self) -> dict[str, Any]:
        return {name: self.column(name) for name in self.filter_fields}

    def sortable(self) -> tuple[str, ...]:
        return self.sortable_fields or tuple(self.fields)

    def association(self, name: str) -> Association:
        try:
            return self.associations[name]
        except KeyError as exc:
            raise KeyError(f"{self.label} has no association named {name!r}") from exc


@dataclass(slots=True)
class QueryPage(Generic[ModelT]):
    """One page of rows plus the ordering that produced it."""
    order: tuple[SortKey, SortKey]
    total_count: int
    rows: list[ModelT]

    @property
    def sort(self) -> SortKey:
        return self.order[0]

    @property
    def sort_meta(self) -> dict[str, Any]:
        return self.sort.to_meta()


class EntityQueryEngine(Generic[ModelT]):
    """Filter/sort/paginate/CRUD operations for the entity a descriptor describes."""

    def __init__(self, descriptor: EntityDescriptor) -> None:
        self.descriptor = descriptor
        self.model = descriptor.model
        self._columns = {attr.key for attr in sa_inspect(descriptor.model).column_attrs}

    def coerce_id(self, value: uuid.UUID | str) -> uuid.UUID:
        """Validate identifier shape before it reaches storage."""
        if isinstance(value, uuid.UUID):
            return value
        try:
            return uuid.UUID(str(value))
        except ValueError as exc:
            raise ValidationError(f"Invalid {self.descriptor.label} id: {value!r}.") from exc

    def resolve_order(self, sort: SortRequest | None) -> tuple[SortKey, SortKey]:
        field_name, direction = sort if sort else (None, None)
        return resolve_sort(
            field_name,
            direction,
            default=self.descriptor.default_sort,
            sortable=self.descriptor.sortable(),
            tiebreak=self.descriptor.tiebreak,
        )

    def _order_by(self, order: tuple[SortKey, SortKey]) -> list[Any]:
        clauses = []
        for key in order:
            column = self.descriptor.column(key.field)
            clauses.append(column.desc() if key.direction is SortDirection.DESC else column.asc())
        return clauses

    def _base_select(self, filters: Mapping[str, Any] | None) -> Select:
        clauses = build_filter(
            self.descriptor.filter_columns(), filters, pattern_fields=self.descriptor.pattern_fields
        )
        return select(self.model).where(*clauses)

    async def _fetch_page(
        self,
        session: AsyncSession,
        base: Select,
        *,
        limit: int | None,
        offset: int,
        sort: SortRequest | None,
    ) -> QueryPage[ModelT]:
        resolved_limit = settings.default_page_limit if limit is None else non_negative_int("limit", limit)
        if resolved_limit > MAX_OFFSET:
            raise ValidationError(f"limit must not exceed {MAX_OFFSET}.")
        resolved_offset = check_offset(non_negative_int("offset", offset))
        order = self.resolve_order(sort)
        total_count = func.count().over().label("total_count")
        stmt = base.add_columns(total_count).order_by(*self._order_by(order))
        stmt = stmt.offset(resolved_offset).limit(resolved_limit)
        try:
            result = await session.execute(stmt)
            rows = result.all()
            if rows:
                total = rows[0].total_count
            elif resolved_offset or resolved_limit == 0:
                # The window count has no row to ride on past the last page.
                total = await session.scalar(select(func.count()).select_from(base.subquery())) or 0
            else:
                total = 0
        except SQLAlchemyError as exc:
            await self._fail(session, exc, f"Error fetching {self.descriptor.plural}.")
        items = [row[0] for row in rows]
        logger.debug(
            "Entity list query completed",
            extra={
                "entity": self.descriptor.plural,
                "limit": resolved_limit,
                "offset": resolved_offset,
                "returned": len(items),
                "total": total,
                "sort_field": order[0].field,
                "sort_direction": order[0].direction.value,
            },
        )
        return QueryPage(order=order, total_count=total, rows=items)

    async def _fail(self, session: AsyncSession, exc: SQLAlchemyError, message: str) -> NoReturn:
        await session.rollback()
        logger.exception("Storage failure for %s", self.descriptor.plural, exc_info=exc)
        raise InternalError(message) from exc

    async def list(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
        filters: Mapping[str, Any] | None = None,
        sort: SortRequest | None = None,
    ) -> QueryPage[ModelT]:
        """List rows matching `filters`, ordered by `sort` then the tiebreak key."""
        return await self._fetch_page(session, self._base_select(filters), limit=limit, offset=offset, sort=sort)

    async def list_related_to(
        self,
        session: AsyncSession,
        parent_id: uuid.UUID | str,
        relation: str,
        limit: int | None = None,
        offset: int = 0,
        filters: Mapping[str, Any] | None = None,
        sort: SortRequest | None = None,
    ) -> QueryPage[ModelT]:
        """List rows linked to `parent_id` through the named association.

        A parent that does not exist simply yields an empty page.
        """
        link = self.descriptor.association(relation)
        parent = self.coerce_id(parent_id)
        through = link.through
        base = (
            self._base_select(filters)
            .join(through, getattr(through, link.local_key) == self.model.id)
            .where(getattr(through, link.remote_key) == parent)
        )
        return await self._fetch_page(session, base, limit=limit, offset=offset, sort=sort)

    async def list_excluding_related(
        self,
        session: AsyncSession,
        parent_id: uuid.UUID | str,
        relation: str,
        limit: int | None = None,
        offset: int = 0,
        filters: Mapping[str, Any] | None = None,
        sort: SortRequest | None = None,
    ) -> QueryPage[ModelT]:
        """List rows that are not linked to `parent_id` through the named association."""
        link = self.descriptor.association(relation)
        parent = self.coerce_id(parent_id)
        through = link.through
        linked_ids = select(getattr(through, link.local_key)).where(getattr(through, link.remote_key) == parent)
        base = self._base_select(filters).where(self.model.id.not_in(linked_ids))
        return await self._fetch_page(session, base, limit=limit, offset=offset, sort=sort)

    async def get(self, session: AsyncSession, entity_id: uuid.UUID | str) -> ModelT:
        """Fetch one row by id or raise NotFoundError."""
        key = self.coerce_id(entity_id)
        try:
            result = await session.execute(select(self.model).where(self.model.id == key))
            item = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            await self._fail(session, exc, f"Error fetching {self.descriptor.plural}.")
        if item is None:
            raise NotFoundError.for_entity(self.descriptor.label, key)
        return item

    async def get_related(
        self,
        session: AsyncSession,
        parent_id: uuid.UUID | str,
        child_id: uuid.UUID | str,
        relation: str,
    ) -> ModelT:
        """Fetch `child_id` only if it is linked to `parent_id` through the association."""
        link = self.descriptor.association(relation)
        parent = self.coerce_id(parent_id)
        child = self.coerce_id(child_id)
        through = link.through
        stmt = (
            select(self.model)
            .join(through, getattr(through, link.local_key) == self.model.id)
            .where(self.model.id == child, getattr(through, link.remote_key) == parent)
        )
        try:
            result = await session.execute(stmt)
            item = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            await self._fail(session, exc, f"Error fetching {self.descriptor.plural}.")
        if item is None:
            raise NotFoundError(
                f"{self.descriptor.label}, {child}, is not in {link.related_label}, {parent}."
            )
        return item

    def _check_columns(self, values: Mapping[str, Any]) -> None:
        unknown = sorted(set(values) - self._columns)
        if unknown:
            raise ValidationError(f"Unknown {self.descriptor.label} fields: {', '.join(unknown)}.")

    async def _commit(self, session: AsyncSession, action: str) -> None:
        try:
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            logger.info("Rejected %s %s: %s", action, self.descriptor.label, exc.orig)
            raise ValidationError(
                f"{self.descriptor.label} conflicts with an existing record or references a missing one."
            ) from exc
        except SQLAlchemyError as exc:
            await self._fail(session, exc, f"Error saving {self.descriptor.plural}.")

    async def create(self, session: AsyncSession, values: Mapping[str, Any]) -> ModelT:
        """Insert a new row from attribute values and return it."""
        self._check_columns(values)
        item = self.model(**values)
        session.add(item)
        await self._commit(session, "create")
        await session.refresh(item)
        logger.info("Created %s %s", self.descriptor.label, item.id)
        return item

    async def update(self, session: AsyncSession, entity_id: uuid.UUID | str, values: Mapping[str, Any]) -> ModelT:
        """Replace the given attributes of an existing row."""
        self._check_columns(values)
        if "id" in values:
            raise ValidationError(f"{self.descriptor.label} id is immutable.")
        item = await self.get(session, entity_id)
        for name, value in values.items():
            setattr(item, name, value)
        await self._commit(session, "update")
        await session.refresh(item)
        return item

    async def delete(self, session: AsyncSession, entity_id: uuid.UUID | str) -> uuid.UUID:
        """Delete a row by id; a missing id raises NotFoundError."""
        key = self.coerce_id(entity_id)
        try:
            result = await session.execute(delete(self.model).where(self.model.id == key))
        except SQLAlchemyError as exc:
            await self._fail(session, exc, f"Error deleting {self.descriptor.plural}.")
        if not result.rowcount:
            await session.rollback()
            raise NotFoundError.for_entity(self.descriptor.label, key)
        await self._commit(session, "delete")
        logger.info("Deleted %s %s", self.descriptor.label, key)
        return key


def build_descriptor_fields(pairs: Sequence[tuple[str, str]]) -> dict[str, str]:
    """Build a public-name to attribute-name map, always exposing `id`."""
    fields = {"id": "id"}
    fields.update(pairs)
    return fields
