"""Configuration for the optimistic oracle CLI."""

from dataclasses import dataclass, field
from pathlib import Path

from pycardano import Network

from optimistic_oracle_core.models.oracle_datums import MIN_CHALLENGE_PERIOD

from .keys import WalletConfig
from .utils import ConfigFromDict, load_yaml_config


@dataclass
class LedgerConfig(ConfigFromDict):
    """Location of the local ledger state file."""

    state_path: str = "oracle_state.json"


@dataclass
class DefaultsConfig(ConfigFromDict):
    """Defaults applied to new requests when options are omitted."""

    bond_amount: int = 1_000_000
    challenge_period: int = MIN_CHALLENGE_PERIOD


@dataclass
class OracleConfig:
    """Top level CLI configuration."""

    wallet: WalletConfig
    network: Network = Network.TESTNET
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @property
    def state_path(self) -> Path:
        return Path(self.ledger.state_path)

    @classmethod
    def from_dict(cls, data: dict, base_dir: Path | None = None) -> "OracleConfig":
        """Create oracle config from dictionary.

        Relative paths are resolved against base_dir when given.
        """
        network = Network[str(data.get("network", "TESTNET")).upper()]
        wallet = WalletConfig.from_dict(data.get("wallet", {}), network)
        ledger = LedgerConfig.from_dict(data.get("ledger", {}))

        if base_dir is not None:
            ledger.state_path = str(base_dir / ledger.state_path)
            for attr in ("payment_skey_path", "payment_vkey_path"):
                value = getattr(wallet, attr)
                if value:
                    setattr(wallet, attr, str(base_dir / value))

        return cls(
            wallet=wallet,
            network=network,
            ledger=ledger,
            defaults=DefaultsConfig.from_dict(data.get("defaults", {})),
        )

    @classmethod
    def from_yaml(cls, path: Path | str) -> "OracleConfig":
        """Load oracle configuration from YAML."""
        path = Path(path)
        return cls.from_dict(load_yaml_config(path), base_dir=path.parent)
