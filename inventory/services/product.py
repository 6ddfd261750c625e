"""Product service.

Coordinates the ``Producto`` and ``Barcode`` tables so that the FK from a
product to its barcode stays consistent:

- a new barcode is inserted before the product that references it, since the
  FK needs the generated id;
- a barcode is only soft-deleted after the FK pointing at it was cleared;
- a barcode is never referenced by two products (UNIQUE FK) and a product
  never gets a second barcode.
"""
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from sqlalchemy.orm import Session

from .base import BaseService, require_id, require_text
from .barcode import BarcodeService
from ..dao.product import ProductDAO
from ..db.session import SessionManager
from ..entities import Barcode, BarcodeType, Product
from ..errors import (
    BarcodeAlreadyAssignedError,
    BarcodeMismatchError,
    InvalidEntityError,
    LifecycleError,
    NotFoundError,
)

MAX_NAME_LENGTH = 120
MAX_BRAND_LENGTH = 80
MAX_CATEGORY_LENGTH = 80

def to_decimal(value, field: str, places: int = 2, integer_digits: int = 8) -> Optional[Decimal]:
    """Coerce user input to a Decimal that fits a NUMERIC column.

    None and '' stay None. ``places`` and ``integer_digits`` are the scale
    and precision minus scale of the target column.
    """
    if value is None or value == '':
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidEntityError(f"{field} must be a number, got '{value}'")
    if not number.is_finite():
        raise InvalidEntityError(f"{field} must be a finite number, got '{value}'")
    if abs(number) >= Decimal(10) ** integer_digits:
        raise InvalidEntityError(f"{field} cannot have more than {integer_digits} integer digits")
    if number != number.quantize(Decimal(1).scaleb(-places)):
        raise InvalidEntityError(f"{field} cannot have more than {places} decimal places")
    return number

class ProductService(BaseService[Product]):
    """Product lifecycle plus the product <-> barcode association."""

    def __init__(
        self,
        session_manager: SessionManager,
        barcode_service: Optional[BarcodeService] = None,
        dao: Optional[ProductDAO] = None
    ):
        super().__init__(session_manager, dao or ProductDAO())
        self.barcode_service = barcode_service or BarcodeService(session_manager)

    def validate(self, product: Product) -> None:
        if product is None:
            raise InvalidEntityError("Product cannot be None")
        require_text(product.name, "Product name cannot be empty")
        require_text(product.brand, "Product brand cannot be empty")
        require_text(product.category, "Product category cannot be empty")
        for field, limit in (('name', MAX_NAME_LENGTH), ('brand', MAX_BRAND_LENGTH), ('category', MAX_CATEGORY_LENGTH)):
            if len(str(getattr(product, field)).strip()) > limit:
                raise InvalidEntityError(f"Product {field} cannot exceed {limit} characters")
        product.price = to_decimal(product.price, 'Price')
        if product.price is None or product.price <= 0:
            raise InvalidEntityError("Product price must be greater than 0")
        product.weight = to_decimal(product.weight, 'Weight', places=3, integer_digits=7)
        if product.weight is not None and product.weight <= 0:
            raise InvalidEntityError("Product weight must be greater than 0")

    def create_tx(self, session: Session, product: Product) -> Product:
        """Insert a product, inserting or updating its attached barcode first."""
        self.validate(product)
        barcode = product.barcode
        if barcode is not None:
            if barcode.is_new:
                self.barcode_service.create_tx(session, barcode)
            else:
                self._check_unassigned(session, barcode.id, owner_id=None)
                self.barcode_service.update_tx(session, barcode)
        elif product.barcode_id is not None:
            raise InvalidEntityError(f"Attach barcode {product.barcode_id} to the product instead of setting its ID")
        self.dao.insert(session, product)
        self.logger.info(
            f"Created product {product.id} ({product.name})"
            + (f" with barcode {product.barcode_id}" if product.barcode_id else "")
        )
        return product

    def update_tx(self, session: Session, product: Product) -> Product:
        """Update a product and reconcile its barcode.

        - persisted barcode: updated in place (shared row, every referencing
          product sees the change);
        - new barcode: inserted and associated, only if the product has no
          active barcode yet;
        - detached with ``attach(None)``: the FK is cleared, the barcode row is
          left untouched;
        - no barcode loaded but ``barcode_id`` kept (a dangling reference): the
          FK is stored as is.
        """
        self.validate(product)
        require_id(product.id, "Product ID")
        stored = self.dao.get_by_id(session, product.id)
        if stored is None:
            raise NotFoundError('product', product.id)

        barcode = product.barcode
        if barcode is not None:
            if barcode.is_new:
                if stored.barcode is not None:
                    raise BarcodeAlreadyAssignedError(
                        f"Product {product.id} already has barcode {stored.barcode.id}; remove it first"
                    )
                self.barcode_service.create_tx(session, barcode)
            else:
                if barcode.id != stored.barcode_id:
                    self._check_unassigned(session, barcode.id, owner_id=product.id)
                self.barcode_service.update_tx(session, barcode)
        elif product.barcode_id is not None and product.barcode_id != stored.barcode_id:
            raise InvalidEntityError(
                f"Product {product.id} references barcode {product.barcode_id} without attaching it"
            )
        elif product.barcode_id is None and stored.barcode_id is not None:
            self.logger.info(f"Detaching barcode {stored.barcode_id} from product {product.id}")

        self.dao.update(session, product)
        self.logger.info(f"Updated product {product.id}")
        return product

    def remove_barcode(self, product_id: int, barcode_id: int) -> None:
        """Safely delete the barcode owned by a product.

        Clears the product's FK and persists it before soft-deleting the
        barcode, in one transaction. If the barcode was already eliminated
        (a dangling reference) only the FK is cleared.

        Raises:
            InvalidEntityError: If either id is not positive
            NotFoundError: If the product is not active
            BarcodeMismatchError: If the product does not reference the barcode
        """
        require_id(product_id, "Product ID")
        require_id(barcode_id, "Barcode ID")
        with self.session_manager as session:
            product = self.dao.get_by_id(session, product_id)
            if product is None:
                raise NotFoundError('product', product_id)
            if product.barcode_id != barcode_id:
                raise BarcodeMismatchError(product_id, barcode_id)

            dangling = product.has_dangling_barcode
            product.attach(None)
            self.dao.update(session, product)
            self.logger.info(f"Cleared barcode reference of product {product_id}")

            still_referenced = self.dao.find_referencing(session, barcode_id, include_eliminated=False)
            if still_referenced:
                ids = ', '.join(str(p.id) for p in still_referenced)
                raise LifecycleError(f"Barcode {barcode_id} is still referenced by active products: {ids}")

            if dangling:
                self.logger.warning(f"Barcode {barcode_id} was already eliminated; only the reference was cleared")
                return
            self.barcode_service.delete_tx(session, barcode_id)

    def update_barcode_of(
        self,
        product_id: int,
        barcode_type: Optional[BarcodeType] = None,
        value: Optional[str] = None,
        assigned_on: Optional[date] = None,
        observations: Optional[str] = None
    ) -> Barcode:
        """Edit the barcode owned by a product; ``None`` keeps a field as is."""
        require_id(product_id, "Product ID")
        with self.session_manager as session:
            product = self.dao.get_by_id(session, product_id)
            if product is None:
                raise NotFoundError('product', product_id)
            if product.barcode is None:
                raise InvalidEntityError(f"Product {product_id} has no barcode")

            barcode = product.barcode
            if barcode_type is not None:
                barcode.type = BarcodeType.parse(barcode_type)
            if value is not None and value.strip():
                barcode.value = value
            if assigned_on is not None:
                barcode.assigned_on = assigned_on
            if observations is not None:
                barcode.observations = observations
            return self.barcode_service.update_tx(session, barcode)

    def search(self, text: str) -> List[Product]:
        """Active products whose name or brand contains ``text``."""
        require_text(text, "Search filter cannot be empty")
        with self.session_manager as session:
            return self.dao.search(session, text)

    def find_by_barcode(self, barcode_id: int) -> List[Product]:
        """Active products whose FK points at ``barcode_id``."""
        require_id(barcode_id, "Barcode ID")
        with self.session_manager as session:
            return self.dao.find_referencing(session, barcode_id, include_eliminated=False)

    def find_dangling(self) -> List[Product]:
        """Active products whose FK points at an eliminated barcode."""
        with self.session_manager as session:
            return self.dao.find_dangling(session)

    def clear_dangling(self) -> List[Product]:
        """Clear the FK of every dangling product; returns the repaired products."""
        with self.session_manager as session:
            repaired = self.dao.find_dangling(session)
            for product in repaired:
                self.logger.info(f"Clearing dangling barcode {product.barcode_id} from product {product.id}")
                product.attach(None)
                self.dao.update(session, product)
            return repaired

    def _check_unassigned(self, session: Session, barcode_id: int, owner_id: Optional[int]) -> None:
        """Enforce that a barcode is referenced by at most one product."""
        owners = [p for p in self.dao.find_referencing(session, barcode_id) if p.id != owner_id]
        if owners:
            raise BarcodeAlreadyAssignedError(
                f"Barcode {barcode_id} is already assigned to product {owners[0].id}"
            )
