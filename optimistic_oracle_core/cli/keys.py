"""CLI commands for generating wallet keys."""

import logging
from pathlib import Path

import click
from pycardano import Address, Network, PaymentSigningKey, PaymentVerificationKey

from .config.formatting import print_address_info, print_hash_info, print_status

logger = logging.getLogger(__name__)


def generate_payment_keys(
    output_dir: Path, name: str = "payment", network: Network = Network.TESTNET
) -> tuple[PaymentVerificationKey, Address]:
    """Create and save a payment key pair plus its hash.

    Args:
        output_dir: Directory to save key files
        name: Base file name for the keys
        network: Network used to derive the address

    Returns:
        Tuple of (verification key, address)

    Raises:
        FileExistsError: If any of the key files already exists
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    skey_path = output_dir / f"{name}.skey"
    vkey_path = output_dir / f"{name}.vkey"
    vkh_path = output_dir / f"{name}.vkh"
    for path in (skey_path, vkey_path, vkh_path):
        if path.exists():
            raise FileExistsError(f"Key file already exists: {path}")

    signing_key = PaymentSigningKey.generate()
    verification_key = PaymentVerificationKey.from_signing_key(signing_key)

    signing_key.save(str(skey_path))
    verification_key.save(str(vkey_path))
    with vkh_path.open("w") as f:
        f.write(verification_key.hash().payload.hex())

    logger.info("Generated payment keys in %s", output_dir)
    return verification_key, Address(verification_key.hash(), network=network)


@click.group()
def keys() -> None:
    """Wallet key commands."""


@keys.command()
@click.option(
    "--output-dir",
    type=click.Path(path_type=Path),
    default="keys",
    help="Output directory for key files",
)
@click.option("--name", default="payment", help="Base name of the key files")
@click.option(
    "--network",
    type=click.Choice(["TESTNET", "MAINNET"], case_sensitive=False),
    default="TESTNET",
    help="Network for the displayed address",
)
def generate(output_dir: Path, name: str, network: str) -> None:
    """Generate a new payment key pair."""
    try:
        verification_key, address = generate_payment_keys(
            output_dir, name, Network[network.upper()]
        )
    except Exception as e:
        logger.error("Failed to generate keys", exc_info=e)
        raise click.ClickException(str(e)) from e

    print_status("Keys", f"saved to {output_dir}")
    print_hash_info("Verification key hash", verification_key.hash().payload.hex())
    print_address_info("Address", str(address))
