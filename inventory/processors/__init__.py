"""Bulk processors."""

from .base import BaseProcessor, ProcessingStats
from .catalog import CatalogLoader
from .error_tracker import ErrorTracker

__all__ = ['BaseProcessor', 'ProcessingStats', 'CatalogLoader', 'ErrorTracker']
