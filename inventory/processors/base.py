"""Base processor for batched CSV loads."""
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Tuple
import logging
import time
import pandas as pd
from sqlalchemy.orm import Session

from ..db.session import SessionManager

class ProcessingStats:
    """Statistics for processing operations."""

    def __init__(self):
        """Initialize stats with default values."""
        self._stats = {
            'total_processed': 0,
            'successful_batches': 0,
            'failed_batches': 0,
            'total_errors': 0,
            'processing_time': 0.0,
            'started_at': datetime.now(timezone.utc),
            'completed_at': None
        }

    def __getitem__(self, key: str) -> Any:
        return self._stats[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._stats[key] = value

    def __getattr__(self, name: str) -> Any:
        """Get stat value by attribute name; unknown stats start at 0."""
        if name.startswith('__'):
            raise AttributeError(name)
        try:
            return self._stats[name]
        except KeyError:
            self._stats[name] = 0
            return 0

    def __setattr__(self, name: str, value: Any) -> None:
        if name == '_stats':
            super().__setattr__(name, value)
        else:
            self._stats[name] = value

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary format."""
        result = {}
        for key, value in self._stats.items():
            if isinstance(value, datetime):
                result[key] = value.isoformat()
            elif isinstance(value, float):
                result[key] = round(value, 3)
            else:
                result[key] = value
        return result

class BaseProcessor(ABC):
    """Abstract base class for CSV processors.

    Data is validated as a whole first, then written in batches; each batch
    is its own transaction, so a failing batch is rolled back without
    affecting the batches already committed.
    """

    def __init__(
        self,
        session_manager: SessionManager,
        batch_size: int = 100,
        error_limit: int = 1000,
        debug: bool = False
    ):
        """Initialize processor with session manager and configuration.

        Args:
            session_manager: Database session manager
            batch_size: Number of records to process in each batch
            error_limit: Maximum number of errors before stopping
            debug: Enable debug logging
        """
        self.session_manager = session_manager
        self.batch_size = batch_size
        self.error_limit = error_limit
        self.debug = debug
        self.logger = logging.getLogger(self.__class__.__name__)
        self.stats = ProcessingStats()

    @abstractmethod
    def validate_data(self, df: pd.DataFrame) -> Tuple[List[str], List[str]]:
        """Validate data before processing.

        Returns:
            Tuple of (critical_issues, warnings)
        """
        pass

    @abstractmethod
    def _process_batch(self, session: Session, batch_df: pd.DataFrame) -> Dict[str, int]:
        """Process a single batch of data inside one transaction.

        Returns:
            Counters merged into the stats once the batch is committed
        """
        pass

    def read_file(self, path: Path) -> pd.DataFrame:
        """Read a CSV file with every cell as a string."""
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
        df.columns = [str(col).strip() for col in df.columns]
        return df

    def process_file(self, path: Path) -> Dict[str, Any]:
        """Read and process a CSV file.

        Returns:
            Dict with the processing stats
        """
        self.logger.info(f"Processing {path}")
        self.process(self.read_file(path))
        return {'stats': self.get_stats()}

    def process(self, data: pd.DataFrame) -> None:
        """Process the data in batches with error handling.

        Args:
            data: DataFrame to process
        """
        start_time = time.time()
        critical_issues, warnings = self.validate_data(data)

        for warning in warnings:
            self.logger.warning(f"Validation warning: {warning}")

        if critical_issues:
            for issue in critical_issues:
                self.logger.error(f"Validation failed: {issue}")
            self.stats.total_errors += len(critical_issues)
            return

        total_rows = len(data)
        total_batches = (total_rows + self.batch_size - 1) // self.batch_size
        if self.debug:
            self.logger.debug(f"Processing {total_rows} rows in {total_batches} batches")

        for batch_num, start_idx in enumerate(range(0, total_rows, self.batch_size), 1):
            batch_df = data.iloc[start_idx:start_idx + self.batch_size]
            try:
                with self.session_manager as session:
                    counts = self._process_batch(session, batch_df)
                for key, value in (counts or {}).items():
                    setattr(self.stats, key, getattr(self.stats, key) + value)
                self.stats.successful_batches += 1
                self.stats.total_processed += len(batch_df)
            except Exception as e:
                self.logger.error(f"Error in batch {batch_num} (rows {start_idx}-{start_idx + len(batch_df) - 1}): {e}")
                self.stats.failed_batches += 1
                self.stats.total_errors += 1

            if self.stats.total_errors >= self.error_limit:
                self.logger.error(f"Stopping: Error limit ({self.error_limit}) reached")
                break

        self.stats.processing_time = time.time() - start_time
        self.stats.completed_at = datetime.now(timezone.utc)

    def get_stats(self) -> Dict[str, Any]:
        """Get processing statistics."""
        return self.stats.to_dict()
