"""Generic soft-delete aware CRUD over a single model."""

from typing import Any, Dict, List, Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from netadmin.core.exceptions import ResourceConflictError, ResourceNotFoundError


class CrudService:
    """CRUD for models carrying ``id`` and a ``deleted`` flag.

    Rows are never removed: delete sets ``deleted = 1`` and every read
    filters deleted rows out.
    """

    def __init__(self, model: Type[Any], label: str):
        self.model = model
        self.label = label

    def _active(self, db: Session):
        return db.query(self.model).filter(self.model.deleted == 0)

    def get(self, db: Session, entity_id: int) -> Any:
        """Get one non-deleted row.

        Raises:
            ResourceNotFoundError: If the row is missing or soft-deleted.
        """
        entity = self._active(db).filter(self.model.id == entity_id).first()
        if not entity:
            raise ResourceNotFoundError(f"{self.label} with ID {entity_id} not found")
        return entity

    def list(self, db: Session, **filters: Any) -> List[Any]:
        """List non-deleted rows, optionally filtered by column equality."""
        query = self._active(db)
        for column, value in filters.items():
            if value is not None:
                query = query.filter(getattr(self.model, column) == value)
        return query.order_by(self.model.id).all()

    def create(self, db: Session, data: Dict[str, Any]) -> Any:
        entity = self.model(**data)
        db.add(entity)
        self._commit(db)
        db.refresh(entity)
        return entity

    def update(self, db: Session, entity_id: int, changes: Dict[str, Any]) -> Any:
        entity = self.get(db, entity_id)
        for field, value in changes.items():
            setattr(entity, field, value)
        self._commit(db)
        db.refresh(entity)
        return entity

    def soft_delete(self, db: Session, entity_id: int) -> Any:
        entity = self.get(db, entity_id)
        entity.deleted = 1
        self._commit(db)
        db.refresh(entity)
        return entity

    def _commit(self, db: Session) -> None:
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise ResourceConflictError(f"{self.label} violates a constraint") from e
