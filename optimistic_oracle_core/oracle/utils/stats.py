"""Aggregate statistics over oracle requests."""

from collections import Counter
from collections.abc import Iterable

from pycardano import VerificationKeyHash

from optimistic_oracle_core.blockchain.ledger import Ledger
from optimistic_oracle_core.constants.status import RequestStatus
from optimistic_oracle_core.models.base import ProposerStats, RequestStats
from optimistic_oracle_core.models.oracle_datums import (
    OracleStateDatum,
    RequestDatum,
    Resolved,
)
from optimistic_oracle_core.oracle.utils.accounting import locked_amount


def request_stats(
    registry: OracleStateDatum | None,
    requests: Iterable[RequestDatum],
    ledger: Ledger,
) -> RequestStats:
    """Count requests per status and sum the funds still in escrow."""
    requests = list(requests)
    counts = Counter(request.status for request in requests)
    return RequestStats(
        total=registry.request_count if registry else len(requests),
        active=counts[RequestStatus.CREATED],
        proposed=counts[RequestStatus.PROPOSED],
        disputed=counts[RequestStatus.DISPUTED],
        resolved=counts[RequestStatus.RESOLVED],
        cancelled=counts[RequestStatus.CANCELLED],
        total_volume=registry.total_volume if registry else 0,
        total_locked=sum(locked_amount(ledger, r.request_id) for r in requests),
    )


def proposer_stats(
    requests: Iterable[RequestDatum], proposer: VerificationKeyHash
) -> ProposerStats:
    """Summarise the proposals of one principal.

    A proposal is successful when the request resolved with the proposer as
    winner, either undisputed or by the resolver's decision.
    """
    proposed = [r for r in requests if r.proposer == proposer]
    won = [
        r
        for r in proposed
        if isinstance(r.phase, Resolved) and r.phase.winner == proposer
    ]
    total = len(proposed)
    return ProposerStats(
        proposer=proposer.payload.hex(),
        total_proposals=total,
        successful_proposals=len(won),
        total_earnings=sum(r.phase.payout for r in won),
        success_rate=len(won) / total if total else 0.0,
    )
