"""CLI commands for oracle registry setup and statistics."""

import logging
from pathlib import Path

import click

from optimistic_oracle_core.oracle.utils.stats import proposer_stats, request_stats

from .base import (
    config_option,
    load_config,
    open_program,
    parse_vkh,
    run_instruction,
)
from .config.formatting import (
    print_hash_info,
    print_header,
    print_proposer_stats,
    print_request_stats,
)

logger = logging.getLogger(__name__)


@click.group()
def oracle() -> None:
    """Oracle registry commands."""


@oracle.command()
@config_option
@click.option(
    "--admin", required=True, help="Verification key hash of the dispute resolver"
)
def init(config: Path, admin: str) -> None:
    """Initialize the oracle registry."""
    print_header("Initialize Oracle")
    oracle_config = load_config(config)
    admin_vkh = parse_vkh(admin)

    result = run_instruction(
        oracle_config,
        lambda orchestrator, sk: orchestrator.initialize(sk, admin_vkh),
    )
    print_hash_info("Admin", result.registry.admin.payload.hex())


@oracle.command()
@config_option
@click.option("--proposer", help="Also show statistics for this proposer key hash")
def stats(config: Path, proposer: str | None) -> None:
    """Show request statistics."""
    oracle_config = load_config(config)
    with open_program(oracle_config) as program:
        registry = program.registry if program.is_initialized else None
        requests = program.list_requests()
        print_request_stats(request_stats(registry, requests, program.ledger))
        if proposer:
            print_proposer_stats(proposer_stats(requests, parse_vkh(proposer)))
