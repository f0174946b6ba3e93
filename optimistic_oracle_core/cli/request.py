"""CLI commands for oracle requests."""

import logging
import time
from pathlib import Path

import click

from optimistic_oracle_core.constants.status import RequestStatus
from optimistic_oracle_core.models.escrow import request_pools
from optimistic_oracle_core.models.oracle_datums import (
    ANSWER_TYPES,
    answer_type_from_name,
)
from optimistic_oracle_core.oracle.exceptions import OracleError
from optimistic_oracle_core.oracle.utils.accounting import audit_request

from .base import config_option, load_config, open_program, run_instruction
from .config.formatting import (
    print_address_info,
    print_audit,
    print_header,
    print_request,
    print_request_table,
    print_status,
    print_value,
)

logger = logging.getLogger(__name__)

request_id_option = click.option(
    "--request-id", type=int, required=True, help="Request identifier"
)


@click.group()
def request() -> None:
    """Oracle request commands."""


@request.command()
@config_option
@click.option("--question", required=True, help="Question to be answered")
@click.option(
    "--answer-type",
    type=click.Choice(sorted(ANSWER_TYPES), case_sensitive=False),
    default="yes_no",
    show_default=True,
    help="Expected answer format",
)
@click.option("--reward", type=int, required=True, help="Reward paid to the winner")
@click.option("--bond", type=int, help="Bond for proposer and disputer")
@click.option("--expiry", type=int, help="Expiry as POSIX seconds")
@click.option(
    "--expires-in", type=int, help="Expiry as seconds from now (alternative to --expiry)"
)
@click.option("--challenge-period", type=int, help="Challenge window in seconds")
@click.option("--data-source", help="Optional data source hint")
@click.option("--metadata", help="Optional metadata")
def create(
    config: Path,
    question: str,
    answer_type: str,
    reward: int,
    bond: int | None,
    expiry: int | None,
    expires_in: int | None,
    challenge_period: int | None,
    data_source: str | None,
    metadata: str | None,
) -> None:
    """Create a new oracle request and escrow its reward."""
    if (expiry is None) == (expires_in is None):
        raise click.UsageError("Provide exactly one of --expiry or --expires-in")

    print_header("Create Request")
    oracle_config = load_config(config)
    expiry_timestamp = expiry if expiry is not None else int(time.time()) + expires_in
    bond_amount = bond if bond is not None else oracle_config.defaults.bond_amount
    period = (
        challenge_period
        if challenge_period is not None
        else oracle_config.defaults.challenge_period
    )

    result = run_instruction(
        oracle_config,
        lambda orchestrator, sk: orchestrator.create_request(
            sk,
            question=question,
            answer_type=answer_type_from_name(answer_type),
            reward_amount=reward,
            bond_amount=bond_amount,
            expiry_timestamp=expiry_timestamp,
            challenge_period=period,
            data_source=data_source,
            metadata=metadata,
        ),
    )
    print_value("Request id", result.request.request_id)


@request.command()
@config_option
@request_id_option
@click.option("--answer", required=True, help="Proposed answer")
def propose(config: Path, request_id: int, answer: str) -> None:
    """Propose an answer, posting the bond."""
    print_header("Propose Answer")
    result = run_instruction(
        load_config(config),
        lambda orchestrator, sk: orchestrator.propose_answer(sk, request_id, answer),
    )
    print_value("Challenge ends", result.request.challenge_ends_at)


@request.command()
@config_option
@request_id_option
@click.option("--counter-answer", help="Answer the disputer believes is correct")
def dispute(config: Path, request_id: int, counter_answer: str | None) -> None:
    """Dispute the proposed answer, posting the bond."""
    print_header("Dispute Answer")
    run_instruction(
        load_config(config),
        lambda orchestrator, sk: orchestrator.dispute_answer(
            sk, request_id, counter_answer
        ),
    )


@request.command()
@config_option
@request_id_option
def resolve(config: Path, request_id: int) -> None:
    """Settle an undisputed proposal after the challenge window."""
    print_header("Resolve Request")
    result = run_instruction(
        load_config(config),
        lambda orchestrator, sk: orchestrator.resolve_undisputed(sk, request_id),
    )
    print_value("Answer", result.request.answer)
    print_value("Payout", result.request.phase.payout)


@request.command(name="resolve-dispute")
@config_option
@request_id_option
@click.option(
    "--winner",
    type=click.Choice(["proposer", "disputer"], case_sensitive=False),
    required=True,
    help="Which side the resolver rules for",
)
def resolve_dispute(config: Path, request_id: int, winner: str) -> None:
    """Settle a disputed request (admin only)."""
    proposer_wins = winner.lower() == "proposer"
    print_header("Resolve Dispute")
    result = run_instruction(
        load_config(config),
        lambda orchestrator, sk: orchestrator.resolve_disputed_via_vote(
            sk, request_id, proposer_wins
        ),
    )
    print_value("Winner", result.request.phase.winner.payload.hex())
    print_value("Payout", result.request.phase.payout)


@request.command()
@config_option
@request_id_option
def cancel(config: Path, request_id: int) -> None:
    """Cancel a request without a proposal and refund the reward."""
    print_header("Cancel Request")
    run_instruction(
        load_config(config),
        lambda orchestrator, sk: orchestrator.cancel_request(sk, request_id),
    )


@request.command()
@config_option
@request_id_option
def show(config: Path, request_id: int) -> None:
    """Show a single request."""
    oracle_config = load_config(config)
    with open_program(oracle_config) as program:
        try:
            datum = program.get_request(request_id)
        except OracleError as e:
            raise click.ClickException(str(e)) from e

        print_request(datum)
        click.echo()
        for role, pool in request_pools(request_id).items():
            print_address_info(
                f"{role.value} pool ({program.ledger.balance_of(pool)})",
                str(pool.address(oracle_config.network)),
            )


@request.command(name="list")
@config_option
@click.option(
    "--status",
    type=click.Choice([s.value for s in RequestStatus], case_sensitive=False),
    help="Only show requests in this status",
)
def list_requests(config: Path, status: str | None) -> None:
    """List requests."""
    oracle_config = load_config(config)
    with open_program(oracle_config) as program:
        requests = program.list_requests(
            RequestStatus(status.lower()) if status else None
        )
    print_request_table(requests)


@request.command()
@config_option
@request_id_option
def audit(config: Path, request_id: int) -> None:
    """Check escrow conservation for a request."""
    oracle_config = load_config(config)
    with open_program(oracle_config) as program:
        try:
            program.get_request(request_id)
        except OracleError as e:
            raise click.ClickException(str(e)) from e
        result = audit_request(program.ledger, request_id)

    print_audit(result)
    if not result.is_balanced:
        raise click.ClickException(f"Request {request_id} escrow is not conserved")
    print_status("Audit", "passed")
