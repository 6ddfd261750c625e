"""Barcode table access."""
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from .base import BaseDAO
from ..db.models import BarcodeModel
from ..entities import Barcode

class BarcodeDAO(BaseDAO[Barcode]):
    """Data access for the ``Barcode`` table."""

    model = BarcodeModel
    entity_name = 'barcode'

    def to_entity(self, row: BarcodeModel) -> Barcode:
        return Barcode(
            id=row.id,
            eliminated=bool(row.eliminated),
            type=row.type,
            value=row.value,
            assigned_on=row.assigned_on,
            observations=row.observations
        )

    def to_values(self, barcode: Barcode) -> Dict[str, Any]:
        return {
            'type': barcode.type,
            'value': barcode.value.strip(),
            'assigned_on': barcode.assigned_on,
            'observations': barcode.observations
        }

    def get_by_value(self, session: Session, value: str) -> Optional[Barcode]:
        """Find an active barcode by its exact value."""
        row = self.active(session).filter(BarcodeModel.value == value.strip()).first()
        return self.to_entity(row) if row is not None else None

    def value_taken(self, session: Session, value: str, exclude_id: Optional[int] = None) -> bool:
        """Check the UNIQUE value constraint, which also covers eliminated rows."""
        query = session.query(BarcodeModel.id).filter(BarcodeModel.value == value.strip())
        if exclude_id:
            query = query.filter(BarcodeModel.id != exclude_id)
        return query.first() is not None
