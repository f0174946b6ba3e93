"""Base CLI utilities and helper functions."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import click
from pycardano import (
    Address,
    ExtendedSigningKey,
    PaymentSigningKey,
    PaymentVerificationKey,
    VerificationKeyHash,
)

from optimistic_oracle_core.blockchain.state_store import StateStore
from optimistic_oracle_core.oracle.lifecycle.orchestrator import (
    OracleOrchestrator,
    OracleResult,
)
from optimistic_oracle_core.oracle.program import OracleProgram

from .config.formatting import format_status_update, print_hash_info, print_status
from .config.keys import KeyManager
from .config.oracle import OracleConfig

logger = logging.getLogger(__name__)

config_option = click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to oracle configuration YAML",
)


@dataclass
class LoadedKeys:
    """Container for loaded keys and address."""

    payment_sk: PaymentSigningKey | ExtendedSigningKey
    payment_vk: PaymentVerificationKey
    address: Address

    @property
    def vkh(self) -> VerificationKeyHash:
        return self.payment_vk.hash()


def load_config(path: Path) -> OracleConfig:
    try:
        return OracleConfig.from_yaml(path)
    except Exception as e:
        raise click.ClickException(f"Failed to load config: {e}") from e


def load_keys_with_validation(config: OracleConfig) -> LoadedKeys:
    """Load and validate wallet keys from config."""
    try:
        payment_sk, payment_vk, address = KeyManager.load_from_config(config.wallet)
        return LoadedKeys(payment_sk, payment_vk, address)

    except Exception as e:
        raise click.ClickException(f"Failed to load keys: {e}") from e


def parse_vkh(value: str) -> VerificationKeyHash:
    """Parse a hex verification key hash given on the command line."""
    try:
        return VerificationKeyHash(bytes.fromhex(value))
    except Exception as e:
        raise click.BadParameter(f"Invalid verification key hash: {value}") from e


@contextmanager
def open_program(config: OracleConfig, save: bool = False) -> Iterator[OracleProgram]:
    """Load the program from the configured state file.

    With save=True the state is written back when the block exits cleanly.
    """
    store = StateStore(config.state_path)
    try:
        program = store.load()
    except Exception as e:
        raise click.ClickException(f"Failed to load state: {e}") from e

    yield program

    if save:
        store.save(program)
        logger.debug("State written to %s", store.path)


def run_instruction(config: OracleConfig, operation, verbose: bool = True) -> OracleResult:
    """Sign and submit one instruction with the configured wallet.

    Args:
        config: Loaded CLI configuration
        operation: Callable taking (orchestrator, signing_key) and returning
            an OracleResult
        verbose: Print orchestrator status updates

    Raises:
        click.ClickException: If the instruction is rejected or fails
    """
    keys = load_keys_with_validation(config)
    with open_program(config, save=True) as program:
        orchestrator = OracleOrchestrator(
            program, status_callback=format_status_update if verbose else None
        )
        result = operation(orchestrator, keys.payment_sk)

    if not result.ok:
        raise click.ClickException(f"{result.status.value}: {result.error}")

    print_status("Instruction", "executed successfully")
    print_hash_info("Caller", keys.vkh.payload.hex())
    return result
