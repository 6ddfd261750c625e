"""Domain entities carried between the DAO, service and CLI layers.

An entity whose ``id`` is ``None`` has not been persisted yet; the store
assigns the id on insert and the DAO writes it back onto the entity.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from .errors import InvalidEntityError, LifecycleError


class BarcodeType(str, Enum):
    """Supported barcode symbologies."""

    EAN13 = 'EAN13'
    EAN8 = 'EAN8'
    UPC = 'UPC'

    @classmethod
    def parse(cls, value) -> 'BarcodeType':
        """Parse a barcode type from user input (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            valid = ', '.join(t.value for t in cls)
            raise InvalidEntityError(f"Invalid barcode type '{value}'. Expected one of: {valid}")


class LifecycleState(str, Enum):
    ACTIVE = 'ACTIVE'
    ELIMINATED = 'ELIMINATED'


@dataclass
class Entity:
    """Fields shared by every persisted entity."""

    id: Optional[int] = field(default=None, kw_only=True)
    eliminated: bool = field(default=False, kw_only=True)

    @property
    def is_new(self) -> bool:
        """True until the store has assigned an id."""
        return not self.id

    @property
    def state(self) -> LifecycleState:
        return LifecycleState.ELIMINATED if self.eliminated else LifecycleState.ACTIVE

    def mark_eliminated(self) -> None:
        """Transition ACTIVE -> ELIMINATED.

        Raises:
            LifecycleError: If the entity is not persisted or already eliminated
        """
        if self.is_new:
            raise LifecycleError(f"Cannot eliminate an unsaved {self.__class__.__name__}")
        if self.eliminated:
            raise LifecycleError(f"{self.__class__.__name__} {self.id} is already eliminated")
        self.eliminated = True


@dataclass
class Barcode(Entity):
    """Barcode entity."""

    type: Optional[BarcodeType] = None
    value: Optional[str] = None
    assigned_on: Optional[date] = None
    observations: Optional[str] = None

    def __str__(self) -> str:
        kind = self.type.value if self.type else '?'
        return f"{kind} {self.value}"


@dataclass
class Product(Entity):
    """Product entity with an optional owned barcode."""

    name: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Decimal] = None
    weight: Optional[Decimal] = None
    barcode: Optional[Barcode] = None
    # FK as stored; differs from barcode.id only for a dangling reference
    barcode_id: Optional[int] = None

    @property
    def has_dangling_barcode(self) -> bool:
        """True when the stored FK points at a barcode that is no longer active."""
        return self.barcode_id is not None and self.barcode is None

    def attach(self, barcode: Optional[Barcode]) -> None:
        """Associate (or with ``None``, disassociate) a barcode."""
        self.barcode = barcode
        self.barcode_id = barcode.id if barcode is not None else None

    def __str__(self) -> str:
        code = self.barcode.value if self.barcode else 'N/A'
        return f"{self.name} ({self.brand}) ${self.price} [barcode: {code}]"
