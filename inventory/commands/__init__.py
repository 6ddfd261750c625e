"""CLI commands."""

from .barcodes import barcode, BarcodeCommand
from .load import load, LoadCatalogCommand
from .menu import menu, MenuCommand
from .products import product, ProductCommand
from .utils import init_db, test_connection, InitDatabaseCommand, TestConnectionCommand
from .verify import verify, VerifyReferencesCommand

__all__ = [
    'barcode', 'BarcodeCommand',
    'load', 'LoadCatalogCommand',
    'menu', 'MenuCommand',
    'product', 'ProductCommand',
    'init_db', 'test_connection', 'InitDatabaseCommand', 'TestConnectionCommand',
    'verify', 'VerifyReferencesCommand',
]
