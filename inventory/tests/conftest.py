"""Shared test fixtures and utilities."""

import csv
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import text

from ..db.session import SessionManager
from ..entities import Barcode, BarcodeType, Product
from ..services import BarcodeService, ProductService

@pytest.fixture
def session_manager():
    """In-memory SQLite database with the schema created."""
    manager = SessionManager('sqlite://')
    manager.create_schema()
    yield manager
    manager.engine.dispose()

@pytest.fixture
def barcode_service(session_manager):
    return BarcodeService(session_manager)

@pytest.fixture
def product_service(session_manager, barcode_service):
    return ProductService(session_manager, barcode_service)

@pytest.fixture
def make_barcode():
    """Factory for unsaved barcodes."""
    def _make(value='CB000001', barcode_type=BarcodeType.EAN13, **kwargs):
        return Barcode(type=barcode_type, value=value, **kwargs)
    return _make

@pytest.fixture
def make_product():
    """Factory for unsaved products."""
    def _make(name='mesa', brand='Muebleria Argentina', category='nuevo', price='100.50', weight='12.5', barcode=None):
        product = Product(
            name=name,
            brand=brand,
            category=category,
            price=Decimal(price) if price is not None else None,
            weight=Decimal(weight) if weight is not None else None
        )
        if barcode is not None:
            product.attach(barcode)
        return product
    return _make

@pytest.fixture
def product_with_barcode(product_service, make_product, make_barcode):
    """A persisted product owning a persisted barcode."""
    product = make_product(barcode=make_barcode(assigned_on=date(2024, 1, 15)))
    return product_service.create(product)

def raw_barcode_row(session_manager, barcode_id):
    """Read a Barcode row directly, eliminated or not."""
    with session_manager as session:
        return session.execute(
            text('SELECT id, eliminado, valor FROM "Barcode" WHERE id = :id'),
            {'id': barcode_id}
        ).first()

def raw_product_fk(session_manager, product_id):
    """Read the stored barcode FK of a product directly."""
    with session_manager as session:
        return session.execute(
            text('SELECT "codigoBarras_id" FROM "Producto" WHERE id = :id'),
            {'id': product_id}
        ).scalar()

def create_test_csv(directory: Path, rows, fieldnames=None) -> Path:
    """Write a catalog CSV file with the given rows."""
    fieldnames = fieldnames or [
        'name', 'brand', 'category', 'price', 'weight',
        'barcode_type', 'barcode_value', 'assigned_on', 'observations'
    ]
    path = directory / 'catalog.csv'
    with open(path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path
