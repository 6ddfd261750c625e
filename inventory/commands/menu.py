"""Interactive console menu."""

from typing import Callable, Dict, Optional, Tuple

import click

from ..cli.base import BaseCommand
from ..cli.display import echo_barcodes, echo_product, echo_products, format_barcode
from ..entities import Barcode, BarcodeType, Product
from ..errors import InventoryError

BARCODE_TYPE_CHOICE = click.Choice([t.value for t in BarcodeType], case_sensitive=False)

class MenuCommand(BaseCommand):
    """Numbered menu over the product and barcode operations.

    Errors from an option are printed and the menu is shown again; they
    never end the session.
    """

    def __init__(self, config, **kwargs):
        super().__init__(config, **kwargs)
        self.options: Dict[str, Tuple[str, Callable[[], None]]] = {
            '1': ("Create product", self.create_product),
            '2': ("List / search products", self.list_products),
            '3': ("Update product", self.update_product),
            '4': ("Delete product", self.delete_product),
            '5': ("Create barcode", self.create_barcode),
            '6': ("List barcodes", self.list_barcodes),
            '7': ("Update barcode of a product", self.update_barcode_of_product),
            '8': ("Delete barcode by ID (does not check products)", self.delete_barcode),
            '9': ("Update barcode by ID", self.update_barcode),
            '10': ("Remove barcode from a product (safe)", self.remove_barcode_from_product),
            '11': ("Check dangling barcode references", self.check_references),
        }

    def execute(self) -> None:
        while True:
            self.show_menu()
            choice = click.prompt("Option", default='0', show_default=False).strip()
            if choice == '0':
                click.echo("Bye.")
                return
            option = self.options.get(choice)
            if option is None:
                click.echo("Invalid option.")
                continue
            label, handler = option
            try:
                handler()
            except InventoryError as e:
                click.secho(f"Error: {e}", fg='red', err=True)
            except Exception as e:
                self.logger.error(f"{label} failed: {e}", exc_info=self.debug)
                click.secho(f"Error: {e}", fg='red', err=True)

    def show_menu(self) -> None:
        click.echo("\n========= INVENTORY =========")
        for key, (label, _) in self.options.items():
            click.echo(f"{key:>2}. {label}")
        click.echo(" 0. Exit")

    # Input helpers

    def _ask(self, label: str, current: Optional[str] = None) -> str:
        """Prompt for text; with ``current``, Enter keeps the current value."""
        if current is not None:
            value = click.prompt(f"{label} ({current})", default='', show_default=False).strip()
            return value or current
        return click.prompt(label, default='', show_default=False).strip()

    def _ask_id(self, label: str) -> int:
        return click.prompt(label, type=int)

    def _ask_barcode(self) -> Barcode:
        barcode_type = click.prompt("Barcode type", type=BARCODE_TYPE_CHOICE)
        value = self._ask("Barcode value")
        observations = self._ask("Observations") or None
        return Barcode(type=BarcodeType.parse(barcode_type), value=value, observations=observations)

    def _edit_barcode(self, barcode: Barcode) -> None:
        barcode.type = BarcodeType.parse(self._ask("New type", barcode.type.value))
        barcode.value = self._ask("New value", barcode.value)

    # Product options

    def create_product(self) -> None:
        product = Product(
            name=self._ask("Name"),
            brand=self._ask("Brand"),
            category=self._ask("Category"),
            price=self._ask("Price"),
            weight=self._ask("Weight") or None
        )
        if click.confirm("Add a barcode?", default=False):
            product.attach(self._ask_barcode())
        self.products.create(product)
        click.secho(f"Product created with ID: {product.id}", fg='green')

    def list_products(self) -> None:
        mode = click.prompt("(1) list all or (2) search by name/brand", type=click.Choice(['1', '2']))
        if mode == '1':
            echo_products(self.products.get_all())
        else:
            echo_products(self.products.search(self._ask("Text to search")))

    def update_product(self) -> None:
        product = self.products.get_by_id(self._ask_id("Product ID"))
        if product is None:
            click.echo("Product not found.")
            return
        product.name = self._ask("New name", product.name)
        product.brand = self._ask("New brand", product.brand)
        product.category = self._ask("New category", product.category)
        product.price = self._ask("New price", str(product.price))
        weight = self._ask("New weight", str(product.weight) if product.weight is not None else '')
        product.weight = weight or None

        if product.barcode is not None:
            if click.confirm("Update the barcode?", default=False):
                self._edit_barcode(product.barcode)
        elif click.confirm("The product has no barcode. Add one?", default=False):
            product.attach(self._ask_barcode())

        self.products.update(product)
        click.secho("Product updated.", fg='green')

    def delete_product(self) -> None:
        self.products.delete(self._ask_id("Product ID to delete"))
        click.secho("Product deleted.", fg='green')

    # Barcode options

    def create_barcode(self) -> None:
        barcode = self._ask_barcode()
        self.barcodes.create(barcode)
        click.secho(f"Barcode created with ID: {barcode.id}", fg='green')

    def list_barcodes(self) -> None:
        echo_barcodes(self.barcodes.get_all())

    def update_barcode_of_product(self) -> None:
        product = self.products.get_by_id(self._ask_id("Product ID"))
        if product is None:
            click.echo("Product not found.")
            return
        if product.barcode is None:
            click.echo("The product has no barcode.")
            return
        barcode = product.barcode
        self._edit_barcode(barcode)
        self.barcodes.update(barcode)
        click.secho("Barcode updated.", fg='green')

    def delete_barcode(self) -> None:
        barcode_id = self._ask_id("Barcode ID to delete")
        self.barcodes.delete(barcode_id)
        click.secho("Barcode deleted.", fg='green')
        for product in self.products.find_by_barcode(barcode_id):
            click.secho(f"Warning: product {product.id} still references barcode {barcode_id}", fg='yellow')

    def update_barcode(self) -> None:
        barcode = self.barcodes.get_by_id(self._ask_id("Barcode ID"))
        if barcode is None:
            click.echo("Barcode not found.")
            return
        click.echo(f"Current: {format_barcode(barcode)}")
        self._edit_barcode(barcode)
        self.barcodes.update(barcode)
        click.secho("Barcode updated.", fg='green')

    def remove_barcode_from_product(self) -> None:
        product = self.products.get_by_id(self._ask_id("Product ID"))
        if product is None:
            click.echo("Product not found.")
            return
        if product.barcode_id is None:
            click.echo("The product has no barcode.")
            return
        self.products.remove_barcode(product.id, product.barcode_id)
        click.secho("Barcode deleted and product reference cleared.", fg='green')

    def check_references(self) -> None:
        dangling = self.products.find_dangling()
        if not dangling:
            click.secho("No dangling barcode references.", fg='green')
            return
        for product in dangling:
            echo_product(product)

@click.command('menu')
@click.pass_context
def menu(ctx):
    """Interactive console menu."""
    MenuCommand(ctx.obj['config']).execute()
