from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from notification_feed.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Thin query helper bound to one mapped model.

    Writes and tenant-sensitive lookups go through ``db``; heavy feed reads use
    ``read_db`` which may be bound to a replica (see ``get_read_db``).
    """

    model: type[ModelT]

    def __init__(self, db: Session, read_db: Session | None = None) -> None:
        self.db = db
        self.read_db = read_db or db

    def find(self, **filters: Any) -> Sequence[ModelT]:
        stmt = select(self.model).filter_by(**filters).order_by(self.model.id)
        return self.db.scalars(stmt).all()

    def find_one(self, **filters: Any) -> ModelT | None:
        stmt = select(self.model).filter_by(**filters).limit(1)
        return self.db.scalars(stmt).first()

    def create(self, **values: Any) -> ModelT:
        obj = self.model(**values)
        self.db.add(obj)
        self.db.flush()
        return obj
