""" Configuration classes for the CLI. """

from .keys import KeyManager, WalletConfig
from .oracle import DefaultsConfig, LedgerConfig, OracleConfig
from .utils import load_yaml_config, setup_logging
