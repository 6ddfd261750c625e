"""Barcode service."""
from typing import Optional

from sqlalchemy.orm import Session

from .base import BaseService, require_id, require_text
from ..dao.barcode import BarcodeDAO
from ..db.session import SessionManager
from ..entities import Barcode, BarcodeType
from ..errors import DuplicateBarcodeError, InvalidEntityError

MAX_VALUE_LENGTH = 20
MAX_OBSERVATIONS_LENGTH = 255

class BarcodeService(BaseService[Barcode]):
    """Validates barcodes and delegates persistence to ``BarcodeDAO``.

    ``delete`` is the unsafe path: it does not look for products that still
    reference the barcode and so can leave a dangling FK behind. Use
    ``ProductService.remove_barcode`` to delete a barcode owned by a product.
    """

    def __init__(self, session_manager: SessionManager, dao: Optional[BarcodeDAO] = None):
        super().__init__(session_manager, dao or BarcodeDAO())

    def validate(self, barcode: Barcode) -> None:
        if barcode is None:
            raise InvalidEntityError("Barcode cannot be None")
        if barcode.type is None:
            raise InvalidEntityError("Barcode type is required")
        barcode.type = BarcodeType.parse(barcode.type)
        require_text(barcode.value, "Barcode value is required")
        if len(barcode.value.strip()) > MAX_VALUE_LENGTH:
            raise InvalidEntityError(f"Barcode value cannot exceed {MAX_VALUE_LENGTH} characters")
        if barcode.observations and len(barcode.observations) > MAX_OBSERVATIONS_LENGTH:
            raise InvalidEntityError(f"Observations cannot exceed {MAX_OBSERVATIONS_LENGTH} characters")

    def create_tx(self, session: Session, barcode: Barcode) -> Barcode:
        """Insert a new barcode; the store assigns its id."""
        self.validate(barcode)
        if self.dao.value_taken(session, barcode.value):
            raise DuplicateBarcodeError(barcode.value.strip())
        self.dao.insert(session, barcode)
        self.logger.info(f"Created barcode {barcode.id} ({barcode})")
        return barcode

    def update_tx(self, session: Session, barcode: Barcode) -> Barcode:
        """Update a persisted barcode in place.

        Every product referencing the barcode sees the new data, since they
        all point at the same row.
        """
        self.validate(barcode)
        require_id(barcode.id, "Barcode ID")
        if self.dao.value_taken(session, barcode.value, exclude_id=barcode.id):
            raise DuplicateBarcodeError(barcode.value.strip())
        self.dao.update(session, barcode)
        self.logger.info(f"Updated barcode {barcode.id} ({barcode})")
        return barcode

    def find_by_value(self, value: str) -> Optional[Barcode]:
        require_text(value, "Barcode value cannot be empty")
        with self.session_manager as session:
            return self.dao.get_by_value(session, value)
