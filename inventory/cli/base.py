"""
Base command infrastructure for the inventory CLI.
Provides common functionality and utilities for all commands.
"""

import click
import functools
import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

from .config import Config

from ..db.session import SessionManager
from ..errors import InventoryError
from ..processors.error_tracker import ErrorTracker
from ..services import BarcodeService, ProductService

class BaseCommand(ABC):
    """Base class for all CLI commands."""

    def __init__(self, config: Config, session_manager: Optional[SessionManager] = None):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self.error_tracker = ErrorTracker()
        self._session_manager = session_manager
        self._barcode_service = None
        self._product_service = None

        # Get debug status from click context
        ctx = click.get_current_context(silent=True)
        self.debug = bool(ctx and ctx.obj and ctx.obj.get('debug'))
        if self.debug:
            self.logger.debug(f"Debug mode enabled for {self.__class__.__name__}")

    @property
    def session_manager(self) -> SessionManager:
        """Get or create the session manager."""
        if self._session_manager is None:
            if self.debug:
                self.logger.debug(f"Creating new engine for {self.config.database_url}")
            self._session_manager = SessionManager(self.config.database_url, echo=self.config.echo_sql)
        return self._session_manager

    @property
    def barcodes(self) -> BarcodeService:
        if self._barcode_service is None:
            self._barcode_service = BarcodeService(self.session_manager)
        return self._barcode_service

    @property
    def products(self) -> ProductService:
        if self._product_service is None:
            self._product_service = ProductService(self.session_manager, self.barcodes)
        return self._product_service

    @abstractmethod
    def execute(self) -> None:
        """Execute the command. Must be implemented by subclasses."""
        pass

def command_error_handler(f):
    """Decorator to handle command execution errors consistently.

    Domain errors are shown to the user as is; anything else is logged and
    recorded in the error tracker. Both abort the command.
    """
    @functools.wraps(f)
    def wrapper(self, *args, **kwargs):
        start = time.time()
        if self.debug:
            self.logger.debug(f"Starting command execution: {f.__name__}")
        try:
            result = f(self, *args, **kwargs)
        except InventoryError as e:
            click.secho(f"Error: {str(e)}", fg='red', err=True)
            raise click.Abort()
        except (click.Abort, click.ClickException):
            raise
        except Exception as e:
            self.error_tracker.add_error(
                'COMMAND_EXECUTION_ERROR',
                f"Command failed: {str(e)}",
                {
                    'command': f.__name__,
                    'args': str(args),
                    'kwargs': str(kwargs),
                    'error': str(e)
                }
            )
            self.logger.error(f"Command {f.__name__} failed: {str(e)}", exc_info=self.debug)
            click.secho(f"Error: {str(e)}", fg='red', err=True)
            raise click.Abort()
        if self.debug:
            self.logger.debug(f"Command completed in {time.time() - start:.3f}s")
        return result
    return wrapper
