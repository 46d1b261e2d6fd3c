"""Per-model query entry points exposed as ``Model.objects``."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlmodel import SQLModel, col, select

from app.db.queryset import QuerySet

ModelT = TypeVar("ModelT", bound=SQLModel)


class ModelManager(Generic[ModelT]):
    """Build querysets scoped to one table model."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    def all(self) -> QuerySet[ModelT]:
        return QuerySet(select(self.model))

    def filter(self, *criteria: Any) -> QuerySet[ModelT]:
        return self.all().filter(*criteria)

    def filter_by(self, **kwargs: object) -> QuerySet[ModelT]:
        return self.all().filter_by(**kwargs)

    def by_field(self, field_name: str, value: object) -> QuerySet[ModelT]:
        return self.filter(col(getattr(self.model, field_name)) == value)

    def by_id(self, obj_id: object) -> QuerySet[ModelT]:
        return self.by_field("id", obj_id)


class ManagerDescriptor(Generic[ModelT]):
    """Class-level descriptor returning a manager bound to the owning model."""

    def __get__(self, instance: object, owner: type[ModelT]) -> ModelManager[ModelT]:
        return ModelManager(owner)
