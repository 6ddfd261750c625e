"""Catalog load command for product CSV files."""

import json
from pathlib import Path
from typing import Optional

import click

from ..cli.base import BaseCommand, command_error_handler
from ..cli.config import Config
from ..processors.catalog import CatalogLoader

class LoadCatalogCommand(BaseCommand):
    """Load products and barcodes from a CSV file."""

    def __init__(
        self,
        config: Config,
        input_file: Path,
        output_file: Optional[Path] = None,
        batch_size: Optional[int] = None,
        **kwargs
    ):
        """Initialize command.

        Args:
            config: Application configuration
            input_file: Path to input CSV file
            output_file: Optional path to save results as JSON
            batch_size: Rows per transaction (defaults to the configured size)
        """
        super().__init__(config, **kwargs)
        self.input_file = input_file
        self.output_file = output_file
        self.batch_size = batch_size or config.batch_size

    @command_error_handler
    def execute(self) -> int:
        """Execute the command.

        Returns:
            Exit code
        """
        loader = CatalogLoader(self.session_manager, batch_size=self.batch_size, debug=self.debug)
        self.logger.info(f"Loading catalog from {self.input_file} (batch size {self.batch_size})")

        loader.process_file(self.input_file)
        summary = loader.get_summary()
        stats = summary['stats']

        click.echo(f"Products created: {stats.get('created', 0)}")
        click.echo(f"Barcodes created: {stats.get('created_barcodes', 0)}")
        click.echo(f"Rows skipped: {stats.get('skipped', 0)}")
        loader.error_tracker.log_summary(self.logger)

        if self.output_file:
            with open(self.output_file, 'w') as f:
                json.dump(summary, f, indent=2, default=str)
            click.echo(f"Detailed results saved to {self.output_file}")

        if stats['failed_batches'] > 0 or (stats['total_errors'] > 0 and stats['total_processed'] == 0):
            click.secho(f"Failed batches: {stats['failed_batches']}, errors: {stats['total_errors']}", fg='red')
            return 1
        return 0

@click.command('load')
@click.argument('file', type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path))
@click.option('--output', type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
              help='Save load results to a JSON file')
@click.option('--batch-size', type=int, help='Number of rows per transaction')
@click.pass_context
def load(ctx, file: Path, output: Optional[Path], batch_size: Optional[int]):
    """Load products and barcodes from a CSV file."""
    command = LoadCatalogCommand(ctx.obj['config'], file, output, batch_size)
    if command.execute():
        ctx.exit(1)
