"""Main CLI entry point for the optimistic oracle tools."""

import click

from optimistic_oracle_core.cli.account import account
from optimistic_oracle_core.cli.config.utils import setup_logging
from optimistic_oracle_core.cli.keys import keys
from optimistic_oracle_core.cli.oracle import oracle
from optimistic_oracle_core.cli.request import request


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """Optimistic oracle CLI tools."""
    setup_logging(verbose)


# Add command groups
cli.add_command(keys)
cli.add_command(account)
cli.add_command(oracle)
cli.add_command(request)


if __name__ == "__main__":
    cli()
