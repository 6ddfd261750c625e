"""Console formatting of products and barcodes."""

from typing import Iterable

import click

from ..entities import Barcode, Product

def format_barcode(barcode: Barcode) -> str:
    line = f"ID: {barcode.id}, {barcode.type.value if barcode.type else '?'} {barcode.value}"
    if barcode.assigned_on:
        line += f", assigned: {barcode.assigned_on.isoformat()}"
    if barcode.observations:
        line += f", notes: {barcode.observations}"
    return line

def format_product(product: Product) -> str:
    line = (
        f"ID: {product.id}, Name: {product.name}, Brand: {product.brand}, "
        f"Category: {product.category}, Price: {product.price}"
    )
    if product.weight is not None:
        line += f", Weight: {product.weight}"
    return line

def echo_product(product: Product) -> None:
    click.echo(format_product(product))
    if product.barcode is not None:
        click.echo(f"   Barcode -> {format_barcode(product.barcode)}")
    elif product.has_dangling_barcode:
        click.secho(f"   Barcode -> {product.barcode_id} (eliminated, dangling reference)", fg='yellow')

def echo_products(products: Iterable[Product]) -> None:
    products = list(products)
    if not products:
        click.echo("No products found.")
        return
    for product in products:
        echo_product(product)

def echo_barcodes(barcodes: Iterable[Barcode]) -> None:
    barcodes = list(barcodes)
    if not barcodes:
        click.echo("No barcodes found.")
        return
    for barcode in barcodes:
        click.echo(format_barcode(barcode))
