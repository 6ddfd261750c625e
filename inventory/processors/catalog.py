"""Catalog loader: products and their barcodes from a CSV file."""

from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
from sqlalchemy.orm import Session

from .base import BaseProcessor
from .error_tracker import ErrorTracker
from ..db.session import SessionManager
from ..entities import Barcode, BarcodeType, Product
from ..errors import ConstraintViolationError, InvalidEntityError
from ..services import BarcodeService, ProductService

REQUIRED_COLUMNS = ['name', 'brand', 'category', 'price']
OPTIONAL_COLUMNS = ['weight', 'barcode_type', 'barcode_value', 'assigned_on', 'observations']

def _cell(row: pd.Series, column: str) -> Optional[str]:
    """Stripped cell value, None when the column is missing or the cell is blank."""
    if column not in row.index:
        return None
    value = row[column]
    if value is None or pd.isna(value):
        return None
    value = str(value).strip()
    return value or None

class CatalogLoader(BaseProcessor):
    """Load products, each optionally with a new barcode, from CSV rows.

    Expected columns: name, brand, category, price and optionally weight,
    barcode_type, barcode_value, assigned_on (YYYY-MM-DD), observations.
    Rows failing validation are skipped and recorded; the rest of the batch
    is still written.
    """

    def __init__(
        self,
        session_manager: SessionManager,
        batch_size: int = 100,
        error_limit: int = 1000,
        debug: bool = False
    ):
        super().__init__(session_manager, batch_size, error_limit, debug)
        self.error_tracker = ErrorTracker()
        self.product_service = ProductService(session_manager, BarcodeService(session_manager))

    def validate_data(self, df: pd.DataFrame) -> Tuple[List[str], List[str]]:
        critical_issues = []
        warnings = []

        missing_columns = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing_columns:
            critical_issues.append(f"Missing required columns: {', '.join(missing_columns)}")
            return critical_issues, warnings

        unknown = [col for col in df.columns if col not in REQUIRED_COLUMNS + OPTIONAL_COLUMNS]
        if unknown:
            warnings.append(f"Ignoring unknown columns: {', '.join(unknown)}")

        if 'barcode_value' in df.columns:
            values = df['barcode_value'].map(lambda v: str(v).strip() if v is not None and not pd.isna(v) else '')
            values = values[values != '']
            duplicated = values[values.duplicated()]
            if not duplicated.empty:
                warnings.append(
                    f"Found {len(duplicated)} repeated barcode values; only the first occurrence will be loaded. "
                    f"First few: {', '.join(duplicated.head(3).tolist())}"
                )
            if 'barcode_type' not in df.columns and not values.empty:
                critical_issues.append("Column barcode_type is required when barcode_value is present")

        return critical_issues, warnings

    def build_product(self, row: pd.Series) -> Product:
        """Build a product (and its new barcode, if any) from a CSV row."""
        product = Product(
            name=_cell(row, 'name'),
            brand=_cell(row, 'brand'),
            category=_cell(row, 'category'),
            price=_cell(row, 'price'),
            weight=_cell(row, 'weight')
        )
        value = _cell(row, 'barcode_value')
        if value:
            assigned_on = _cell(row, 'assigned_on')
            try:
                assigned = date.fromisoformat(assigned_on) if assigned_on else None
            except ValueError:
                raise InvalidEntityError(f"Invalid assigned_on date '{assigned_on}', expected YYYY-MM-DD")
            product.attach(Barcode(
                type=BarcodeType.parse(_cell(row, 'barcode_type')),
                value=value,
                assigned_on=assigned,
                observations=_cell(row, 'observations')
            ))
        return product

    def _process_batch(self, session: Session, batch_df: pd.DataFrame) -> Dict[str, int]:
        counts = {'created': 0, 'created_barcodes': 0, 'skipped': 0}
        for idx, row in batch_df.iterrows():
            try:
                product = self.build_product(row)
                self.product_service.create_tx(session, product)
            except ConstraintViolationError:
                # The session is no longer usable; fail the whole batch
                raise
            except InvalidEntityError as e:
                counts['skipped'] += 1
                self.error_tracker.add_error(
                    'INVALID_ROW',
                    str(e),
                    {'row': int(idx) + 2, 'name': _cell(row, 'name')}
                )
                if self.debug:
                    self.logger.debug(f"Skipping row {int(idx) + 2}: {e}")
                continue
            counts['created'] += 1
            if product.barcode is not None:
                counts['created_barcodes'] += 1
        return counts

    def get_summary(self) -> Dict[str, Any]:
        return {
            'stats': self.get_stats(),
            'errors': self.error_tracker.get_summary()
        }
