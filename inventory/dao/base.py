"""Base DAO with soft-delete aware CRUD."""
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from ..entities import Entity
from ..errors import ConstraintViolationError, NotFoundError

E = TypeVar('E', bound=Entity)

class BaseDAO(ABC, Generic[E]):
    """Abstract base class for table access.

    Every method receives the session of the caller's transaction and never
    commits; the ``SessionManager`` owning the session decides that. Reads
    only ever see rows with ``eliminado = false``.
    """

    model: Type[Any]
    entity_name: str

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def to_entity(self, row: Any) -> E:
        """Build an entity from a model row."""
        pass

    @abstractmethod
    def to_values(self, entity: E) -> Dict[str, Any]:
        """Column values (by attribute name) written on insert and update."""
        pass

    def active(self, session: Session) -> Query:
        """Query over active rows only."""
        return session.query(self.model).filter(self.model.eliminated.is_(False))

    def insert(self, session: Session, entity: E) -> E:
        """Insert an entity and write the generated id back onto it."""
        row = self.model(eliminated=False, **self.to_values(entity))
        session.add(row)
        self._flush(session)
        entity.id = row.id
        entity.eliminated = False
        self.logger.debug(f"Inserted {self.entity_name} {entity.id}")
        return entity

    def update(self, session: Session, entity: E) -> None:
        """Update an active row.

        Raises:
            NotFoundError: If no active row has the entity's id
        """
        try:
            rows = (
                self.active(session)
                .filter(self.model.id == entity.id)
                .update(self.to_values(entity), synchronize_session=False)
            )
        except IntegrityError as e:
            raise self._constraint_error(e) from e
        if rows == 0:
            raise NotFoundError(self.entity_name, entity.id)
        self.logger.debug(f"Updated {self.entity_name} {entity.id}")

    def soft_delete(self, session: Session, entity_id: int) -> None:
        """Flip the eliminated flag of an active row.

        Raises:
            NotFoundError: If no active row has this id
        """
        rows = (
            self.active(session)
            .filter(self.model.id == entity_id)
            .update({'eliminated': True}, synchronize_session=False)
        )
        if rows == 0:
            raise NotFoundError(self.entity_name, entity_id)
        self.logger.debug(f"Eliminated {self.entity_name} {entity_id}")

    def get_by_id(self, session: Session, entity_id: int) -> Optional[E]:
        row = self.active(session).filter(self.model.id == entity_id).first()
        return self.to_entity(row) if row is not None else None

    def get_all(self, session: Session) -> List[E]:
        rows = self.active(session).order_by(self.model.id).all()
        return [self.to_entity(row) for row in rows]

    def _flush(self, session: Session) -> None:
        """Flush pending changes, surfacing constraint violations as domain errors."""
        try:
            session.flush()
        except IntegrityError as e:
            raise self._constraint_error(e) from e

    def _constraint_error(self, error: IntegrityError) -> ConstraintViolationError:
        return ConstraintViolationError(f"{self.entity_name} violates a database constraint: {error.orig}")
