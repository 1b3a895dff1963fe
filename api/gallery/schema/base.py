"""Shared schema base classes for API requests and responses."""

from datetime import datetime
from typing import Annotated, Any, Iterable
from uuid import UUID

from pydantic import AfterValidator, AnyHttpUrl, BaseModel, ConfigDict, StringConstraints, TypeAdapter
from pydantic.alias_generators import to_camel

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def _check_http_url(value: str) -> str:
    _HTTP_URL.validate_python(value)
    return value


HttpUrlStr = Annotated[str, StringConstraints(max_length=1024), AfterValidator(_check_http_url)]


class CamelModel(BaseModel):
    """Base model that reads/writes camelCase aliases while keeping snake_case fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ORMModel(CamelModel):
    """Base model that supports building from SQLAlchemy objects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Timestamped(ORMModel):
    """Common identity and timestamps for resource schemas."""
    id: UUID
    created_at: datetime
    updated_at: datetime


def reject_nulls(values: Any, required: Iterable[str]) -> Any:
    """Refuse explicit nulls for fields that cannot be cleared on update."""
    if isinstance(values, dict):
        for name in required:
            if name in values and values[name] is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
            alias = to_camel(name)
            if alias in values and values[alias] is None:
                raise ValueError(f"{alias} cannot be null")
    return values
