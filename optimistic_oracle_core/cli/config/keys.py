"""Key and wallet management utilities for CLI operations."""

from dataclasses import dataclass
from pathlib import Path

from pycardano import (
    Address,
    ExtendedSigningKey,
    HDWallet,
    Network,
    PaymentSigningKey,
    PaymentVerificationKey,
)


@dataclass
class WalletConfig:
    """Configuration for wallet loading."""

    mnemonic: str | None = None
    payment_skey_path: str | None = None
    payment_vkey_path: str | None = None
    network: Network = Network.TESTNET

    @classmethod
    def from_dict(cls, config: dict, network: Network = Network.TESTNET) -> "WalletConfig":
        """Create wallet config from dictionary."""
        mnemonic = config.get("mnemonic")
        if mnemonic and mnemonic.startswith("$"):
            # Unresolved environment variable
            mnemonic = None
        return cls(
            mnemonic=mnemonic,
            payment_skey_path=config.get("payment_skey_path"),
            payment_vkey_path=config.get("payment_vkey_path"),
            network=network,
        )


class KeyManager:
    """Manages loading and deriving keys from mnemonic or files."""

    @staticmethod
    def load_from_mnemonic(
        mnemonic: str, network: Network = Network.TESTNET
    ) -> tuple[ExtendedSigningKey, PaymentVerificationKey, Address]:
        """Load keys from mnemonic phrase.

        Args:
            mnemonic: 24-word mnemonic phrase
            network: Target network

        Returns:
            Tuple of (payment signing key, payment verification key, address)
        """
        hdwallet = HDWallet.from_mnemonic(mnemonic)

        payment_hdwallet = hdwallet.derive_from_path("m/1852'/1815'/0'/0/0")
        payment_signing_key = ExtendedSigningKey.from_hdwallet(payment_hdwallet)
        payment_verification_key = PaymentVerificationKey.from_primitive(
            payment_hdwallet.public_key
        )

        address = Address(payment_verification_key.hash(), network=network)
        return payment_signing_key, payment_verification_key, address

    @staticmethod
    def load_from_files(
        payment_skey_path: Path | str,
        payment_vkey_path: Path | str,
        network: Network = Network.TESTNET,
    ) -> tuple[PaymentSigningKey, PaymentVerificationKey, Address]:
        """Load keys from key files.

        Raises:
            ValueError: If the verification key does not belong to the signing key
        """
        payment_signing_key = PaymentSigningKey.load(str(payment_skey_path))
        payment_verification_key = PaymentVerificationKey.load(str(payment_vkey_path))

        derived = PaymentVerificationKey.from_signing_key(payment_signing_key)
        if derived.hash() != payment_verification_key.hash():
            raise ValueError(
                f"Verification key {payment_vkey_path} does not match "
                f"signing key {payment_skey_path}"
            )

        address = Address(payment_verification_key.hash(), network=network)
        return payment_signing_key, payment_verification_key, address

    @classmethod
    def load_from_config(
        cls, config: WalletConfig
    ) -> tuple[
        PaymentSigningKey | ExtendedSigningKey, PaymentVerificationKey, Address
    ]:
        """Load keys from configuration.

        Raises:
            ValueError: If neither mnemonic nor key paths are provided
        """
        if config.mnemonic:
            return cls.load_from_mnemonic(config.mnemonic, config.network)

        elif all([config.payment_skey_path, config.payment_vkey_path]):
            return cls.load_from_files(
                config.payment_skey_path,
                config.payment_vkey_path,
                config.network,
            )

        else:
            raise ValueError("Must provide either mnemonic or both payment key paths")
