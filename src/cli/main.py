"""CLI entry point for the pattern chatbot."""

import click

from cli.commands import ask, clear, db, history, serve
from cli.config import load_config_model
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Pattern Chatbot - canned and data-driven chat replies."""
    try:
        config = load_config_model()
    except ValueError as e:
        raise click.ClickException(str(e))
    level = "DEBUG" if verbose else config.logging.level
    setup_logging(json_mode=config.logging.json_mode, level=level)


cli.add_command(serve)
cli.add_command(db)
cli.add_command(ask)
cli.add_command(history)
cli.add_command(clear)


if __name__ == "__main__":
    cli()
