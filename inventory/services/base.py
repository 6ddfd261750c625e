"""Base service shared by the barcode and product services."""
from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar
import logging

from sqlalchemy.orm import Session

from ..dao.base import BaseDAO
from ..db.session import SessionManager
from ..entities import Entity
from ..errors import InvalidEntityError

E = TypeVar('E', bound=Entity)

def require_id(entity_id: Optional[int], what: str = 'ID') -> int:
    """Reject ids that cannot belong to a persisted row."""
    if entity_id is None or entity_id <= 0:
        raise InvalidEntityError(f"{what} must be greater than 0")
    return entity_id

def require_text(value: Optional[str], message: str) -> None:
    if value is None or not str(value).strip():
        raise InvalidEntityError(message)

class BaseService(ABC, Generic[E]):
    """Abstract base class for entity services.

    Each public method is one transaction: it opens a session through the
    ``SessionManager``, which commits on success and rolls back on error.
    The ``*_tx`` variants run inside a caller's session so that another
    service can compose them into a larger transaction.
    """

    def __init__(self, session_manager: SessionManager, dao: BaseDAO[E]):
        if session_manager is None:
            raise ValueError("session_manager is required")
        if dao is None:
            raise ValueError("dao is required")
        self.session_manager = session_manager
        self.dao = dao
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def validate(self, entity: E) -> None:
        """Raise ``InvalidEntityError`` if the entity cannot be stored."""
        pass

    @abstractmethod
    def create_tx(self, session: Session, entity: E) -> E:
        pass

    @abstractmethod
    def update_tx(self, session: Session, entity: E) -> E:
        pass

    def create(self, entity: E) -> E:
        with self.session_manager as session:
            return self.create_tx(session, entity)

    def update(self, entity: E) -> E:
        with self.session_manager as session:
            return self.update_tx(session, entity)

    def delete(self, entity_id: int) -> None:
        """Soft delete by id.

        Raises:
            InvalidEntityError: If the id is not positive
            NotFoundError: If no active row matches
        """
        require_id(entity_id)
        with self.session_manager as session:
            self.delete_tx(session, entity_id)

    def delete_tx(self, session: Session, entity_id: int) -> None:
        self.dao.soft_delete(session, entity_id)
        self.logger.info(f"Eliminated {self.dao.entity_name} {entity_id}")

    def get_by_id(self, entity_id: int) -> Optional[E]:
        """Active entity by id, or None when absent or eliminated."""
        require_id(entity_id)
        with self.session_manager as session:
            return self.dao.get_by_id(session, entity_id)

    def get_all(self) -> List[E]:
        with self.session_manager as session:
            return self.dao.get_all(session)
