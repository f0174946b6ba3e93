"""Shared fixtures for optimistic oracle tests."""

from pathlib import Path

import pytest
from pycardano import PaymentSigningKey

from optimistic_oracle_core.blockchain.clock import ManualClock

from .test_utils import START_TIME, write_config, write_payment_keys


@pytest.fixture
def manual_clock() -> ManualClock:
    return ManualClock(START_TIME)


@pytest.fixture
def signing_key() -> PaymentSigningKey:
    return PaymentSigningKey.generate()


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Directory holding a wallet key pair and a config file pointing at it."""
    write_payment_keys(tmp_path / "keys", "payment")
    write_config(
        tmp_path / "config.yml",
        {
            "network": "TESTNET",
            "ledger": {"state_path": "state/oracle_state.json"},
            "wallet": {
                "payment_skey_path": "keys/payment.skey",
                "payment_vkey_path": "keys/payment.vkey",
            },
            "defaults": {"bond_amount": 200, "challenge_period": 3600},
        },
    )
    return tmp_path
