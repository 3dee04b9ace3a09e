import logging

import click
from dotenv import find_dotenv, load_dotenv

from .. import __version__
from ..logging_config import setup_colored_logging
from .commands.fetch_cmd import fetch_vmx
from .commands.storage_cmd import get, list_keys, put, upload_permissions


@click.group(context_settings=dict(help_option_names=['-h', '--help']))
@click.version_option(
    __version__, "-v", "--version", help="Show the CLI version and exit."
)
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="INFO",
    help="Logging level",
)
@click.option(
    "-u",
    "--system-env",
    is_flag=True,
    default=False,
    help="Use system environment variables only; do not load .env file.",
)
def cli(log_level: str, system_env: bool):
    """Stemcell builder artifact tooling"""
    setup_colored_logging(level=getattr(logging, log_level))
    if not system_env:
        load_dotenv(find_dotenv(usecwd=True), override=False)


cli.add_command(fetch_vmx)
cli.add_command(list_keys)
cli.add_command(get)
cli.add_command(put)
cli.add_command(upload_permissions)


def main():
    cli()


if __name__ == "__main__":
    main()
