"""Product commands."""

from typing import Optional

import click

from ..cli.base import BaseCommand, command_error_handler
from ..cli.display import echo_product, echo_products
from ..entities import Barcode, BarcodeType, Product
from .barcodes import BARCODE_TYPES

class ProductCommand(BaseCommand):
    """Product operations, including the product <-> barcode association."""

    @command_error_handler
    def execute(self) -> None:
        """List active products."""
        echo_products(self.products.get_all())

    @command_error_handler
    def create(
        self,
        name: str,
        brand: str,
        category: str,
        price: str,
        weight: Optional[str] = None,
        barcode_type: Optional[str] = None,
        barcode_value: Optional[str] = None,
        barcode_id: Optional[int] = None
    ) -> Product:
        product = Product(name=name, brand=brand, category=category, price=price, weight=weight)
        if barcode_id:
            existing = self.barcodes.get_by_id(barcode_id)
            if existing is None:
                click.echo("Barcode not found.")
                return None
            product.attach(existing)
        elif barcode_value:
            if not barcode_type:
                raise click.UsageError("--barcode-type is required with --barcode-value")
            product.attach(Barcode(type=BarcodeType.parse(barcode_type), value=barcode_value))
        self.products.create(product)
        click.secho(f"Product created with ID: {product.id}", fg='green')
        return product

    @command_error_handler
    def search(self, text: str) -> None:
        echo_products(self.products.search(text))

    @command_error_handler
    def show(self, product_id: int) -> None:
        product = self.products.get_by_id(product_id)
        if product is None:
            click.echo("Product not found.")
            return
        echo_product(product)

    @command_error_handler
    def update(
        self,
        product_id: int,
        name: Optional[str] = None,
        brand: Optional[str] = None,
        category: Optional[str] = None,
        price: Optional[str] = None,
        weight: Optional[str] = None,
        barcode_type: Optional[str] = None,
        barcode_value: Optional[str] = None,
        detach_barcode: bool = False
    ) -> None:
        product = self.products.get_by_id(product_id)
        if product is None:
            click.echo("Product not found.")
            return
        for field, value in (('name', name), ('brand', brand), ('category', category),
                             ('price', price), ('weight', weight)):
            if value is not None:
                setattr(product, field, value)
        if detach_barcode:
            product.attach(None)
        elif barcode_value:
            if product.barcode is not None:
                # Editing the owned barcode in place
                product.barcode.value = barcode_value
                if barcode_type:
                    product.barcode.type = BarcodeType.parse(barcode_type)
            else:
                if not barcode_type:
                    raise click.UsageError("--barcode-type is required to add a barcode")
                product.attach(Barcode(type=BarcodeType.parse(barcode_type), value=barcode_value))
        self.products.update(product)
        click.secho("Product updated.", fg='green')

    @command_error_handler
    def delete(self, product_id: int) -> None:
        self.products.delete(product_id)
        click.secho("Product eliminated. Its barcode, if any, was kept.", fg='green')

    @command_error_handler
    def remove_barcode(self, product_id: int, barcode_id: Optional[int] = None) -> None:
        if barcode_id is None:
            product = self.products.get_by_id(product_id)
            if product is None:
                click.echo("Product not found.")
                return
            if product.barcode_id is None:
                click.echo("The product has no barcode.")
                return
            barcode_id = product.barcode_id
        self.products.remove_barcode(product_id, barcode_id)
        click.secho("Barcode eliminated and product reference cleared.", fg='green')

    @command_error_handler
    def update_barcode(self, product_id: int, barcode_type: Optional[str], value: Optional[str],
                       assigned_on=None, observations: Optional[str] = None) -> None:
        self.products.update_barcode_of(
            product_id,
            barcode_type=barcode_type,
            value=value,
            assigned_on=assigned_on.date() if assigned_on else None,
            observations=observations
        )
        click.secho("Barcode updated.", fg='green')

@click.group()
def product():
    """Product management commands"""
    pass

def _command(ctx) -> ProductCommand:
    return ProductCommand(ctx.obj['config'])

@product.command('create')
@click.option('--name', required=True)
@click.option('--brand', required=True)
@click.option('--category', required=True)
@click.option('--price', required=True, help='Price, greater than 0')
@click.option('--weight')
@click.option('--barcode-type', type=BARCODE_TYPES, help='Type of a new barcode to attach')
@click.option('--barcode-value', help='Value of a new barcode to attach')
@click.option('--barcode-id', type=int, help='Attach an existing, unassigned barcode')
@click.pass_context
def create_product(ctx, name, brand, category, price, weight, barcode_type, barcode_value, barcode_id):
    """Create a product, optionally with a barcode."""
    _command(ctx).create(name, brand, category, price, weight, barcode_type, barcode_value, barcode_id)

@product.command('list')
@click.pass_context
def list_products(ctx):
    """List active products."""
    _command(ctx).execute()

@product.command('search')
@click.argument('text')
@click.pass_context
def search_products(ctx, text: str):
    """Search active products by name or brand."""
    _command(ctx).search(text)

@product.command('show')
@click.argument('product_id', type=int)
@click.pass_context
def show_product(ctx, product_id: int):
    """Show one active product."""
    _command(ctx).show(product_id)

@product.command('update')
@click.argument('product_id', type=int)
@click.option('--name')
@click.option('--brand')
@click.option('--category')
@click.option('--price')
@click.option('--weight')
@click.option('--barcode-type', type=BARCODE_TYPES)
@click.option('--barcode-value', help='Edit the owned barcode, or add one if the product has none')
@click.option('--detach-barcode', is_flag=True, help='Clear the barcode reference (keeps the barcode)')
@click.pass_context
def update_product(ctx, product_id, name, brand, category, price, weight, barcode_type, barcode_value, detach_barcode):
    """Update a product."""
    _command(ctx).update(product_id, name, brand, category, price, weight,
                         barcode_type, barcode_value, detach_barcode)

@product.command('delete')
@click.argument('product_id', type=int)
@click.pass_context
def delete_product(ctx, product_id: int):
    """Eliminate a product. Its barcode is not touched."""
    _command(ctx).delete(product_id)

@product.command('remove-barcode')
@click.argument('product_id', type=int)
@click.option('--barcode-id', type=int, help='Barcode expected on the product (defaults to the current one)')
@click.pass_context
def remove_barcode(ctx, product_id: int, barcode_id: Optional[int]):
    """Safely eliminate the barcode of a product (clears the reference first)."""
    _command(ctx).remove_barcode(product_id, barcode_id)

@product.command('update-barcode')
@click.argument('product_id', type=int)
@click.option('--type', 'barcode_type', type=BARCODE_TYPES)
@click.option('--value')
@click.option('--assigned-on', type=click.DateTime(formats=['%Y-%m-%d']))
@click.option('--observations')
@click.pass_context
def update_product_barcode(ctx, product_id: int, barcode_type, value, assigned_on, observations):
    """Update the barcode owned by a product."""
    _command(ctx).update_barcode(product_id, barcode_type, value, assigned_on, observations)
