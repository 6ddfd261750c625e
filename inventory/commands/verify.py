"""
Command module for reference verification.
"""

import click

from ..cli.base import BaseCommand, command_error_handler
from ..cli.display import format_product

class VerifyReferencesCommand(BaseCommand):
    """Report (and optionally clear) product references to eliminated barcodes."""

    def __init__(self, config, fix: bool = False, **kwargs):
        super().__init__(config, **kwargs)
        self.fix = fix

    @command_error_handler
    def execute(self) -> int:
        """Execute the verification.

        Returns:
            Number of dangling references found
        """
        dangling = self.products.find_dangling()
        if not dangling:
            click.secho("No dangling barcode references found.", fg='green')
            return 0

        click.secho(f"Found {len(dangling)} product(s) referencing an eliminated barcode:", fg='yellow')
        for product in dangling:
            click.echo(f"  {format_product(product)} -> barcode {product.barcode_id}")
        if self.fix:
            cleared = self.products.clear_dangling()
            click.secho(f"Cleared {len(cleared)} reference(s).", fg='green')
        else:
            click.echo("Run with --fix to clear them.")
        return len(dangling)

@click.command('verify')
@click.option('--fix', is_flag=True, help='Clear dangling references')
@click.pass_context
def verify(ctx, fix: bool):
    """Verify product -> barcode reference integrity."""
    VerifyReferencesCommand(ctx.obj['config'], fix=fix).execute()
