"""Storage-agnostic CRUD orchestration over an entity query engine.

Invariants:
- Paging parameters are normalized before the engine is called.
- Engine errors are never swallowed or reinterpreted; they propagate as raised.
"""

from __future__ import annotations

import uuid
from typing import Any, Generic, Mapping, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from gallery.core.errors import ValidationError, describe_errors
from gallery.query.pagination import page_count, paginate
from gallery.schema.pagination import ListEnvelope, ListRequest, SortMeta
from gallery.services.entity_engine import EntityQueryEngine, QueryPage

ReadT = TypeVar("ReadT", bound=BaseModel)


class CrudController(Generic[ReadT]):
    """List/get/create/update/delete for one entity, wrapped in the response envelope."""

    def __init__(
        self,
        engine: EntityQueryEngine,
        read_schema: type[ReadT],
        create_schema: type[BaseModel],
        update_schema: type[BaseModel] | None = None,
    ) -> None:
        self.engine = engine
        self.read_schema = read_schema
        self.create_schema = create_schema
        self.update_schema = update_schema or create_schema

    def _envelope(self, page: int, limit: int, result: QueryPage) -> ListEnvelope[ReadT]:
        return ListEnvelope[self.read_schema](
            limit=limit,
            page=page,
            total_items=result.total_count,
            page_count=page_count(result.total_count, limit),
            rows=[self.read_schema.model_validate(row) for row in result.rows],
            sort=SortMeta.model_validate(result.sort_meta),
        )

    async def list(self, session, request: ListRequest) -> ListEnvelope[ReadT]:
        window = paginate(request.page, request.limit)
        result = await self.engine.list(
            session, window.limit, window.offset, request.filters, request.sort
        )
        return self._envelope(window.page, window.limit, result)

    async def list_related(
        self, session, parent_id: uuid.UUID | str, relation: str, request: ListRequest
    ) -> ListEnvelope[ReadT]:
        """List rows linked to a parent, e.g. the images inside a group."""
        window = paginate(request.page, request.limit)
        result = await self.engine.list_related_to(
            session, parent_id, relation, window.limit, window.offset, request.filters, request.sort
        )
        return self._envelope(window.page, window.limit, result)

    async def list_excluding(
        self, session, parent_id: uuid.UUID | str, relation: str, request: ListRequest
    ) -> ListEnvelope[ReadT]:
        """List rows not linked to a parent, e.g. images that could be added to a group."""
        window = paginate(request.page, request.limit)
        result = await self.engine.list_excluding_related(
            session, parent_id, relation, window.limit, window.offset, request.filters, request.sort
        )
        return self._envelope(window.page, window.limit, result)

    async def get(self, session, entity_id: uuid.UUID | str) -> ReadT:
        item = await self.engine.get(session, entity_id)
        return self.read_schema.model_validate(item)

    async def get_related(
        self, session, parent_id: uuid.UUID | str, child_id: uuid.UUID | str, relation: str
    ) -> ReadT:
        item = await self.engine.get_related(session, parent_id, child_id, relation)
        return self.read_schema.model_validate(item)

    async def create(self, session, payload: BaseModel | Mapping[str, Any]) -> ReadT:
        """Validate the body against the create schema and insert it."""
        body = self._coerce(self.create_schema, payload)
        item = await self.engine.create(session, body.model_dump())
        return self.read_schema.model_validate(item)

    async def update(self, session, entity_id: uuid.UUID | str, payload: BaseModel | Mapping[str, Any]) -> ReadT:
        """Replace only the fields the caller actually sent."""
        body = self._coerce(self.update_schema, payload)
        item = await self.engine.update(session, entity_id, body.model_dump(exclude_unset=True))
        return self.read_schema.model_validate(item)

    async def delete(self, session, entity_id: uuid.UUID | str) -> uuid.UUID:
        return await self.engine.delete(session, entity_id)

    @staticmethod
    def _coerce(schema: type[BaseModel], payload: BaseModel | Mapping[str, Any]) -> BaseModel:
        if isinstance(payload, schema):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(exclude_unset=True)
        try:
            return schema.model_validate(payload)
        except SchemaError as exc:
            raise ValidationError(f"Invalid {schema.__name__} payload: {describe_errors(exc.errors())}") from exc
