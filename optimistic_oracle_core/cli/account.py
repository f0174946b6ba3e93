"""CLI commands for local ledger accounts."""

import logging
from pathlib import Path

import click

from optimistic_oracle_core.oracle.exceptions import OracleError

from .base import (
    config_option,
    load_config,
    load_keys_with_validation,
    open_program,
    parse_vkh,
)
from .config.formatting import print_hash_info, print_status, print_value

logger = logging.getLogger(__name__)


@click.group()
def account() -> None:
    """Local ledger account commands."""


@account.command()
@config_option
@click.option("--amount", type=int, required=True, help="Amount to mint")
@click.option("--to", "to_vkh", help="Recipient key hash (defaults to own wallet)")
def fund(config: Path, amount: int, to_vkh: str | None) -> None:
    """Mint funds into an account on the local ledger."""
    oracle_config = load_config(config)
    recipient = (
        parse_vkh(to_vkh) if to_vkh else load_keys_with_validation(oracle_config).vkh
    )

    with open_program(oracle_config, save=True) as program:
        try:
            balance = program.ledger.deposit(recipient, amount)
        except OracleError as e:
            raise click.ClickException(str(e)) from e

    print_status("Fund", f"deposited {amount}")
    print_hash_info("Account", recipient.payload.hex())
    print_value("Balance", balance)


@account.command()
@config_option
@click.option("--vkh", help="Account key hash (defaults to own wallet)")
def balance(config: Path, vkh: str | None) -> None:
    """Show an account balance."""
    oracle_config = load_config(config)
    holder = parse_vkh(vkh) if vkh else load_keys_with_validation(oracle_config).vkh

    with open_program(oracle_config) as program:
        amount = program.ledger.balance_of(holder)

    print_hash_info("Account", holder.payload.hex())
    print_value("Balance", amount)
