"""Field-by-field projection between ORM entities and pydantic models."""

from typing import Any, TypeVar

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect

T = TypeVar("T")


def project(source: Any, target: type[T]) -> T:
    """Copy ``source`` into a new instance of ``target``.

    Pydantic targets are validated from attributes; ORM targets are built
    from same-named attributes of the source, recursing into relationships.
    Attributes missing on the source are left to the target's defaults.
    """
    if isinstance(target, type) and issubclass(target, BaseModel):
        return target.model_validate(source, from_attributes=True)
    return _to_entity(source, target)


def _to_entity(source: Any, target: type[T]) -> T:
    mapper = sa_inspect(target)
    values: dict[str, Any] = {}

    for column in mapper.column_attrs:
        if hasattr(source, column.key):
            values[column.key] = getattr(source, column.key)

    for relation in mapper.relationships:
        nested = getattr(source, relation.key, None)
        if nested is not None:
            values[relation.key] = _to_entity(nested, relation.mapper.class_)

    return target(**values)
