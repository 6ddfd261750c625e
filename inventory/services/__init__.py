"""Business services: validation and transaction orchestration."""

from .base import BaseService
from .barcode import BarcodeService
from .product import ProductService

__all__ = ['BaseService', 'BarcodeService', 'ProductService']
