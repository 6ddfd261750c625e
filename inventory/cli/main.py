"""
Core CLI implementation for the inventory package.
"""

import click

from .config import Config
from .logging import setup_logging, get_logger
from ..commands import barcode, init_db, load, menu, product, test_connection, verify

@click.group()
@click.option('--debug', is_flag=True, help='Enable detailed debug output')
@click.pass_context
def cli(ctx, debug: bool):
    """Product and barcode inventory CLI"""
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug

    # Initialize config and store in context
    try:
        config = Config.from_env()
    except ValueError as e:
        click.secho(f"Error initializing configuration: {str(e)}", fg='red', err=True)
        ctx.exit(1)
    ctx.obj['config'] = config

    setup_logging(debug=debug, level=config.log_level)
    logger = get_logger('cli')
    if debug:
        logger.debug(f"Using database: {config.database_url}")

cli.add_command(init_db)
cli.add_command(test_connection)
cli.add_command(product)
cli.add_command(barcode)
cli.add_command(verify)
cli.add_command(load)
cli.add_command(menu)
