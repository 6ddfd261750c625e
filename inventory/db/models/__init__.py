"""SQLAlchemy models for database tables."""

from .base import Base
from .barcode import BarcodeModel
from .product import ProductModel

__all__ = [
    'Base',
    'BarcodeModel',
    'ProductModel'
]
