"""Product table access."""
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from .base import BaseDAO
from .barcode import BarcodeDAO
from ..db.models import BarcodeModel, ProductModel
from ..entities import Product

class ProductDAO(BaseDAO[Product]):
    """Data access for the ``Producto`` table.

    Products are read with their barcode through a left join restricted to
    active barcodes. The stored FK is always carried on ``Product.barcode_id``
    so a reference to an eliminated barcode stays visible.
    """

    model = ProductModel
    entity_name = 'product'

    def __init__(self, barcode_dao: Optional[BarcodeDAO] = None):
        super().__init__()
        self.barcode_dao = barcode_dao or BarcodeDAO()

    def to_entity(self, row: ProductModel) -> Product:
        product = Product(
            id=row.id,
            eliminated=bool(row.eliminated),
            name=row.name,
            brand=row.brand,
            category=row.category,
            price=Decimal(row.price) if row.price is not None else None,
            weight=Decimal(row.weight) if row.weight is not None else None,
            barcode=self.barcode_dao.to_entity(row.barcode) if row.barcode is not None else None
        )
        product.barcode_id = row.barcode_id
        return product

    def to_values(self, product: Product) -> Dict[str, Any]:
        # Without a loaded barcode the stored FK is kept, dangling or not
        barcode_id = product.barcode_id
        if product.barcode is not None:
            barcode_id = product.barcode.id if product.barcode.id and product.barcode.id > 0 else None
        return {
            'name': product.name.strip(),
            'brand': product.brand.strip() if product.brand else product.brand,
            'category': product.category.strip() if product.category else product.category,
            'price': product.price,
            'weight': product.weight,
            'barcode_id': barcode_id
        }

    def insert(self, session: Session, product: Product) -> Product:
        super().insert(session, product)
        if product.barcode is not None:
            product.barcode_id = product.barcode.id
        return product

    def update(self, session: Session, product: Product) -> None:
        super().update(session, product)
        if product.barcode is not None:
            product.barcode_id = product.barcode.id

    def search(self, session: Session, text: str) -> List[Product]:
        """Active products whose name or brand contains ``text`` (case-insensitive)."""
        pattern = f"%{text.strip()}%"
        rows = (
            self.active(session)
            .filter(or_(ProductModel.name.ilike(pattern), ProductModel.brand.ilike(pattern)))
            .order_by(ProductModel.id)
            .all()
        )
        return [self.to_entity(row) for row in rows]

    def find_referencing(self, session: Session, barcode_id: int, include_eliminated: bool = True) -> List[Product]:
        """Products whose FK points at ``barcode_id``.

        Eliminated products are included by default because they still hold
        their FK and so still count against the UNIQUE constraint.
        """
        query = session.query(ProductModel) if include_eliminated else self.active(session)
        rows = query.filter(ProductModel.barcode_id == barcode_id).order_by(ProductModel.id).all()
        return [self.to_entity(row) for row in rows]

    def find_dangling(self, session: Session) -> List[Product]:
        """Active products referencing an eliminated barcode."""
        rows = (
            self.active(session)
            .join(BarcodeModel, ProductModel.barcode_id == BarcodeModel.id)
            .filter(BarcodeModel.eliminated.is_(True))
            .order_by(ProductModel.id)
            .all()
        )
        return [self.to_entity(row) for row in rows]
