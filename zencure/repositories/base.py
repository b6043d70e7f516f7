"""Shared persistence helpers for the per-model repositories."""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from zencure.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Id-keyed CRUD over one mapped model.

    Writes flush but never commit; the caller's unit of work decides. Every
    ZenCure table uses a string UUID primary key named ``id``.

    Usage:
        class SourceRepository(BaseRepository[Source]):
            model = Source
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: str) -> T | None:
        return self.session.get(self.model, id)

    def create(self, **values: Any) -> T:
        instance = self.model(**values)
        self.session.add(instance)
        self.session.flush()
        return instance

    def update(self, instance: T, **values: Any) -> T:
        """Set the given attributes; names the model does not map are skipped."""
        for name, value in values.items():
            if hasattr(instance, name):
                setattr(instance, name, value)
        self.session.flush()
        return instance

    def delete(self, instance: T) -> None:
        self.session.delete(instance)
        self.session.flush()

    def count(self, **filters: Any) -> int:
        """
        Count rows whose columns equal the given values.

        Raises:
            ValueError: If a filter names a column the model does not have.
        """
        unknown = [name for name in filters if not hasattr(self.model, name)]
        if unknown:
            raise ValueError(f"Unknown filter key: {', '.join(unknown)}")
        stmt = select(func.count()).select_from(self.model).filter_by(**filters)
        return self.session.scalar(stmt) or 0

    def increment(self, instance: T, field: str, amount: int = 1) -> T:
        """
        Add ``amount`` to a counter column in SQL and reload it.

        Concurrent "helpful" clicks each land; no read-modify-write in Python.
        """
        column = getattr(self.model, field)
        self.session.flush()
        self.session.execute(
            update(self.model)
            .where(self.model.id == instance.id)  # type: ignore[attr-defined]
            .values({column: column + amount})
            .execution_options(synchronize_session=False)
        )
        self.session.refresh(instance, attribute_names=[field])
        return instance
