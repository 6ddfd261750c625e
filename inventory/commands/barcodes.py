"""Barcode commands."""

from datetime import datetime
from typing import Optional

import click

from ..cli.base import BaseCommand, command_error_handler
from ..cli.display import echo_barcodes, format_barcode
from ..entities import Barcode, BarcodeType

BARCODE_TYPES = click.Choice([t.value for t in BarcodeType], case_sensitive=False)

class BarcodeCommand(BaseCommand):
    """Create, list, update and delete barcodes."""

    @command_error_handler
    def execute(self) -> None:
        """List active barcodes."""
        echo_barcodes(self.barcodes.get_all())

    @command_error_handler
    def create(self, barcode_type: str, value: str, assigned_on: Optional[datetime], observations: Optional[str]) -> Barcode:
        barcode = Barcode(
            type=BarcodeType.parse(barcode_type),
            value=value,
            assigned_on=assigned_on.date() if assigned_on else None,
            observations=observations
        )
        self.barcodes.create(barcode)
        click.secho(f"Barcode created with ID: {barcode.id}", fg='green')
        return barcode

    @command_error_handler
    def show(self, barcode_id: int) -> None:
        barcode = self.barcodes.get_by_id(barcode_id)
        if barcode is None:
            click.echo("Barcode not found.")
            return
        click.echo(format_barcode(barcode))

    @command_error_handler
    def update(
        self,
        barcode_id: int,
        barcode_type: Optional[str],
        value: Optional[str],
        assigned_on: Optional[datetime],
        observations: Optional[str]
    ) -> None:
        barcode = self.barcodes.get_by_id(barcode_id)
        if barcode is None:
            click.echo("Barcode not found.")
            return
        if barcode_type:
            barcode.type = BarcodeType.parse(barcode_type)
        if value:
            barcode.value = value
        if assigned_on:
            barcode.assigned_on = assigned_on.date()
        if observations is not None:
            barcode.observations = observations
        self.barcodes.update(barcode)
        click.secho("Barcode updated.", fg='green')

    @command_error_handler
    def delete(self, barcode_id: int) -> None:
        self.barcodes.delete(barcode_id)
        for product in self.products.find_by_barcode(barcode_id):
            click.secho(
                f"Warning: product {product.id} still references barcode {barcode_id} (dangling reference)",
                fg='yellow'
            )
        click.secho("Barcode eliminated.", fg='green')

@click.group()
def barcode():
    """Barcode management commands"""
    pass

def _command(ctx) -> BarcodeCommand:
    return BarcodeCommand(ctx.obj['config'])

@barcode.command('create')
@click.option('--type', 'barcode_type', type=BARCODE_TYPES, required=True, help='Barcode symbology')
@click.option('--value', required=True, help='Barcode value (unique)')
@click.option('--assigned-on', type=click.DateTime(formats=['%Y-%m-%d']), help='Assignment date (YYYY-MM-DD)')
@click.option('--observations', help='Free text notes')
@click.pass_context
def create_barcode(ctx, barcode_type: str, value: str, assigned_on, observations):
    """Create a standalone barcode."""
    _command(ctx).create(barcode_type, value, assigned_on, observations)

@barcode.command('list')
@click.pass_context
def list_barcodes(ctx):
    """List active barcodes."""
    _command(ctx).execute()

@barcode.command('show')
@click.argument('barcode_id', type=int)
@click.pass_context
def show_barcode(ctx, barcode_id: int):
    """Show one active barcode."""
    _command(ctx).show(barcode_id)

@barcode.command('update')
@click.argument('barcode_id', type=int)
@click.option('--type', 'barcode_type', type=BARCODE_TYPES, help='New symbology')
@click.option('--value', help='New value')
@click.option('--assigned-on', type=click.DateTime(formats=['%Y-%m-%d']), help='New assignment date')
@click.option('--observations', help='New notes')
@click.pass_context
def update_barcode(ctx, barcode_id: int, barcode_type, value, assigned_on, observations):
    """Update a barcode by id. Affects every product referencing it."""
    _command(ctx).update(barcode_id, barcode_type, value, assigned_on, observations)

@barcode.command('delete')
@click.argument('barcode_id', type=int)
@click.pass_context
def delete_barcode(ctx, barcode_id: int):
    """Eliminate a barcode by id.

    Does not check for products still referencing the barcode and may leave
    a dangling reference. Prefer `product remove-barcode`.
    """
    _command(ctx).delete(barcode_id)
