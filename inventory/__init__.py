"""Product and barcode inventory package."""

from .entities import Barcode, BarcodeType, Product
from .services import BarcodeService, ProductService

__all__ = ['Barcode', 'BarcodeType', 'Product', 'BarcodeService', 'ProductService']
