"""CLI output formatting for oracle requests."""

from datetime import datetime, timezone

import click

from ...constants.colors import CliColor
from ...constants.status import ProcessStatus, RequestStatus
from ...models.base import ProposerStats, RequestStats
from ...models.oracle_datums import RequestDatum, answer_type_name
from ...oracle.utils.accounting import RequestAudit

STATUS_COLORS = {
    RequestStatus.CREATED: CliColor.OPEN,
    RequestStatus.PROPOSED: CliColor.CHALLENGE,
    RequestStatus.DISPUTED: CliColor.DISPUTE,
    RequestStatus.RESOLVED: CliColor.SETTLED,
    RequestStatus.CANCELLED: CliColor.WITHDRAWN,
}


def print_header(text: str) -> None:
    """Print styled header text."""
    click.echo()
    click.secho(f"=== {text} ===", fg=CliColor.HEADER, bold=True)
    click.echo()


def print_information(text: str) -> None:
    """Print styled information text."""
    click.secho(f"=== {text} ===", fg=CliColor.INFO, bold=True)


def print_address_info(label: str, address: str) -> None:
    """Print formatted address information."""
    click.echo(
        f"{click.style(label, fg=CliColor.INFO)}: "
        f"{click.style(address, fg=CliColor.ADDRESS)}"
    )


def print_hash_info(label: str, hash_value: str) -> None:
    """Print formatted hash information."""
    click.echo(
        f"{click.style(label, fg=CliColor.INFO)}: "
        f"{click.style(hash_value, fg=CliColor.HASH)}"
    )


def print_value(label: str, value: object) -> None:
    click.echo(
        f"{click.style(label, fg=CliColor.INFO)}: "
        f"{click.style(str(value), fg=CliColor.VALUE)}"
    )


def print_status(status: str, message: str, success: bool = True) -> None:
    """Print status message with appropriate styling."""
    icon = "✓" if success else "✗"
    color = CliColor.SUCCESS if success else CliColor.ERROR
    click.secho(f"{icon} {status}: {message}", fg=color)


def print_progress(message: str) -> None:
    """Print progress message."""
    click.secho(f"⟳ {message}...", fg=CliColor.PROGRESS)


def format_status_update(status: ProcessStatus, message: str) -> None:
    """Format and display orchestrator status updates."""
    colors = {
        ProcessStatus.NOT_STARTED: CliColor.INFO,
        ProcessStatus.SIGNING_INSTRUCTION: CliColor.INFO,
        ProcessStatus.INSTRUCTION_SIGNED: CliColor.SUCCESS,
        ProcessStatus.SUBMITTING_INSTRUCTION: CliColor.WARNING,
        ProcessStatus.COMPLETED: CliColor.SUCCESS,
        ProcessStatus.REJECTED: CliColor.ERROR,
        ProcessStatus.FAILED: CliColor.ERROR,
    }

    click.secho(f"[{status.value}] {message}", fg=colors.get(status, CliColor.INFO))


def format_timestamp(timestamp: int | None) -> str:
    if timestamp is None:
        return "-"
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return f"{timestamp} ({moment:%Y-%m-%d %H:%M:%S} UTC)"


def status_badge(status: RequestStatus) -> str:
    return click.style(status.value.upper(), fg=STATUS_COLORS[status], bold=True)


def print_request(request: RequestDatum) -> None:
    """Print every field of a request."""
    print_header(f"Request #{request.request_id}")
    click.echo(f"{click.style('Status', fg=CliColor.INFO)}: {status_badge(request.status)}")
    click.secho(request.question_text, fg=CliColor.DETAIL)
    print_value("Answer type", answer_type_name(request.answer_type))
    print_hash_info("Creator", request.creator.payload.hex())
    print_value("Reward", request.reward_amount)
    print_value("Bond", request.bond_amount)
    print_value("Expiry", format_timestamp(request.expiry_timestamp))
    print_value("Challenge period", f"{request.challenge_period}s")
    print_value("Created at", format_timestamp(request.created_at))
    if request.data_source_text is not None:
        print_value("Data source", request.data_source_text)
    if request.metadata_text is not None:
        print_value("Metadata", request.metadata_text)

    if request.proposal is not None:
        print_information("Proposal")
        print_hash_info("Proposer", request.proposer.payload.hex())
        print_value("Answer", request.answer)
        print_value("Proposed at", format_timestamp(request.proposal_time))
        print_value("Challenge ends", format_timestamp(request.challenge_ends_at))

    if request.dispute is not None:
        print_information("Dispute")
        print_hash_info("Disputer", request.disputer.payload.hex())
        print_value("Disputed at", format_timestamp(request.dispute_time))

    if request.resolved_at is not None:
        print_information("Resolution")
        print_hash_info("Winner", request.phase.winner.payload.hex())
        print_value("Payout", request.phase.payout)
        print_value("Resolved at", format_timestamp(request.resolved_at))


def print_request_table(requests: list[RequestDatum]) -> None:
    """One line per request."""
    if not requests:
        click.secho("No requests found", fg=CliColor.WARNING)
        return
    for request in requests:
        question = request.question_text
        if len(question) > 60:
            question = question[:57] + "..."
        click.echo(
            f"#{request.request_id:<5} {status_badge(request.status):<20} "
            f"reward={request.reward_amount:<12} {question}"
        )


def print_request_stats(stats: RequestStats) -> None:
    print_header("Oracle Statistics")
    for name, value in stats.model_dump().items():
        print_value(name.replace("_", " ").capitalize(), value)


def print_proposer_stats(stats: ProposerStats) -> None:
    print_header("Proposer Statistics")
    print_hash_info("Proposer", stats.proposer)
    print_value("Total proposals", stats.total_proposals)
    print_value("Successful proposals", stats.successful_proposals)
    print_value("Total earnings", stats.total_earnings)
    print_value("Success rate", f"{stats.success_rate:.1%}")


def print_audit(audit: RequestAudit) -> None:
    print_header(f"Escrow Audit #{audit.request_id}")
    print_value("Deposited", audit.deposited)
    print_value("Paid out", audit.paid_out)
    print_value("Remaining", audit.remaining)
    print_status(
        "Conservation",
        "balanced" if audit.is_balanced else "IMBALANCED",
        success=audit.is_balanced,
    )
