"""Barcode model definition."""

from sqlalchemy import Column, Integer, String, Boolean, Date, Enum as SQLEnum

from .base import Base
from ...entities import BarcodeType

class BarcodeModel(Base):
    """Barcode table."""

    __tablename__ = 'Barcode'

    id = Column(Integer, primary_key=True, autoincrement=True)
    eliminated = Column('eliminado', Boolean, default=False, nullable=False)
    type = Column(
        'tipo',
        SQLEnum(BarcodeType, name='tipo_codigo', values_callable=lambda e: [t.value for t in e]),
        nullable=False
    )
    value = Column('valor', String(20), unique=True, nullable=False)
    assigned_on = Column('fecha', Date)
    observations = Column('observaciones', String(255))

    def __repr__(self):
        """Return string representation."""
        return f'<BarcodeModel(id={self.id}, type="{self.type}", value="{self.value}", eliminated={self.eliminated})>'
