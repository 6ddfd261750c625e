"""Data access objects, one per table."""

from .base import BaseDAO
from .barcode import BarcodeDAO
from .product import ProductDAO

__all__ = ['BaseDAO', 'BarcodeDAO', 'ProductDAO']
