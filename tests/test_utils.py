"""Shared utilities for optimistic oracle tests."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pycardano import PaymentSigningKey, PaymentVerificationKey

# Configure shared logger for all test modules
logger = logging.getLogger("oracle_tests")

START_TIME = 1_700_000_000
HOUR = 3600
DAY = 24 * HOUR


def write_payment_keys(directory: Path, name: str) -> PaymentSigningKey:
    """Save a fresh payment key pair under directory and return the signing key."""
    directory.mkdir(parents=True, exist_ok=True)
    signing_key = PaymentSigningKey.generate()
    signing_key.save(str(directory / f"{name}.skey"))
    PaymentVerificationKey.from_signing_key(signing_key).save(
        str(directory / f"{name}.vkey")
    )
    return signing_key


def write_config(config_path: Path, data: dict[str, Any]) -> Path:
    """Write a YAML configuration file."""
    with open(config_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False)
    logger.info(f"Configuration file written: {config_path}")
    return config_path
