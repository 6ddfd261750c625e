"""
Utility commands for the inventory CLI.
Provides helper commands for schema setup and diagnostics.
"""

import click
from sqlalchemy import text

from ..cli.base import BaseCommand, command_error_handler

class TestConnectionCommand(BaseCommand):
    """Command to test database connectivity."""

    @command_error_handler
    def execute(self) -> None:
        """Execute the connection test."""
        self.logger.info("Testing database connection...")
        with self.session_manager as session:
            session.execute(text("SELECT 1")).scalar()
        click.secho("Successfully connected to the database!", fg='green')

class InitDatabaseCommand(BaseCommand):
    """Command to create the Barcode and Producto tables."""

    @command_error_handler
    def execute(self) -> None:
        self.session_manager.create_schema()
        click.secho("Database schema ready.", fg='green')

@click.command('test-connection')
@click.pass_context
def test_connection(ctx):
    """Test database connectivity"""
    TestConnectionCommand(ctx.obj['config']).execute()

@click.command('init-db')
@click.pass_context
def init_db(ctx):
    """Create the database tables if they do not exist"""
    InitDatabaseCommand(ctx.obj['config']).execute()

__all__ = ['TestConnectionCommand', 'InitDatabaseCommand', 'test_connection', 'init_db']
