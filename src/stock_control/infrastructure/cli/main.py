from pathlib import Path

import click

from stock_control.infrastructure.bootstrap import (
    DATA_DIR_ENV_VAR,
    DEFAULT_DATA_DIR,
    DEFAULT_LOG_LEVEL,
    LOG_LEVEL_ENV_VAR,
)
from stock_control.infrastructure.cli.inventory_commands import (
    stock_add,
    stock_history,
    stock_low,
    stock_remove,
)
from stock_control.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
    product_view,
)
from stock_control.logging_config import configure_logging

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=DATA_DIR_ENV_VAR,
    default=DEFAULT_DATA_DIR,
    show_default=True,
    help=f"Directory holding products.json and transactions.json [env: {DATA_DIR_ENV_VAR}].",
)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    envvar=LOG_LEVEL_ENV_VAR,
    default=DEFAULT_LOG_LEVEL,
    show_default=True,
    help=f"Logging threshold for stderr diagnostics [env: {LOG_LEVEL_ENV_VAR}].",
)
@click.option("-v", "--verbose", is_flag=True, help="Shortcut for --log-level INFO.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, log_level: str, verbose: bool) -> None:
    """Stock Control - Inventory Management CLI"""
    configure_logging(level="INFO" if verbose else log_level)
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command("help")
@click.pass_context
def help_command(ctx: click.Context) -> None:
    """Show this help message."""
    click.echo(ctx.parent.get_help())


# Register subcommands
cli.add_command(product_add)
cli.add_command(product_update)
cli.add_command(stock_add)
cli.add_command(stock_remove)
cli.add_command(product_view)
cli.add_command(product_list)
cli.add_command(stock_low)
cli.add_command(stock_history)
cli.add_command(product_delete)
