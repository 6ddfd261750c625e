"""Product model definition."""

from sqlalchemy import Column, Integer, String, Boolean, Numeric, ForeignKey, CheckConstraint, and_
from sqlalchemy.orm import relationship

from .base import Base
from .barcode import BarcodeModel

class ProductModel(Base):
    """Product table. Owns at most one barcode through a unique FK."""

    __tablename__ = 'Producto'
    __table_args__ = (
        CheckConstraint('peso > 0', name='ck_producto_peso'),
        CheckConstraint('precio > 0', name='ck_producto_precio'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    eliminated = Column('eliminado', Boolean, default=False, nullable=False)
    name = Column('nombre', String(120), nullable=False)
    brand = Column('marca', String(80))
    category = Column('categoria', String(80))
    price = Column('precio', Numeric(10, 2), nullable=False)
    weight = Column('peso', Numeric(10, 3))
    barcode_id = Column('codigoBarras_id', Integer, ForeignKey('Barcode.id'), unique=True)

    # Left join that only sees active barcodes; a dangling FK loads as None
    barcode = relationship(
        BarcodeModel,
        primaryjoin=lambda: and_(
            ProductModel.barcode_id == BarcodeModel.id,
            BarcodeModel.eliminated.is_(False)
        ),
        lazy='joined',
        viewonly=True
    )

    def __repr__(self):
        """Return string representation."""
        return f'<ProductModel(id={self.id}, name="{self.name}", barcode_id={self.barcode_id}, eliminated={self.eliminated})>'
