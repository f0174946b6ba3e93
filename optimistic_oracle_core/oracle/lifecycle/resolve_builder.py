"""Resolution transition builders for undisputed and disputed requests."""

import logging

from optimistic_oracle_core.constants.status import RequestStatus
from optimistic_oracle_core.models.base import PosixTime
from optimistic_oracle_core.models.escrow import PoolRole
from optimistic_oracle_core.models.events import DisputeResolved, RequestResolved
from optimistic_oracle_core.models.oracle_datums import (
    NoDatum,
    OracleStateDatum,
    RequestDatum,
    Resolved,
)
from optimistic_oracle_core.oracle.lifecycle.base import (
    BaseBuilder,
    LifecycleTxResult,
    Payment,
)
from optimistic_oracle_core.oracle.utils.signature_checks import VerifiedCaller
from optimistic_oracle_core.oracle.utils.state_checks import (
    require_disputer,
    require_principal,
    require_proposal,
    require_proposer,
    require_status,
)
from optimistic_oracle_core.oracle.utils.time_checks import require_challenge_elapsed
from optimistic_oracle_core.oracle.utils.value_checks import checked_add, checked_mul

logger = logging.getLogger(__name__)


class ResolveUndisputedBuilder(BaseBuilder):
    """Pays reward and returned bond to the proposer once the window closes"""

    def build(
        self,
        request: RequestDatum,
        current_time: PosixTime,
    ) -> LifecycleTxResult:
        require_status(request, RequestStatus.PROPOSED)
        proposal = require_proposal(request)
        require_challenge_elapsed(
            proposal.proposal_time, request.challenge_period, current_time
        )
        proposer = require_proposer(request).proposer

        payout = checked_add(request.reward_amount, request.bond_amount)
        resolved = Resolved(
            proposal=proposal,
            dispute=NoDatum(),
            resolved_at=current_time,
            winner_pkh=proposer.payload,
            payout=payout,
        )
        return LifecycleTxResult(
            request=self.with_phase(request, resolved),
            payments=[
                Payment(
                    self.pool(request, PoolRole.REWARD),
                    proposer,
                    request.reward_amount,
                ),
                Payment(
                    self.pool(request, PoolRole.PROPOSAL_BOND),
                    proposer,
                    request.bond_amount,
                ),
            ],
            event=RequestResolved(
                request_id=request.request_id,
                answer=proposal.answer_text,
                winner=proposer,
                payout=payout,
            ),
        )


class ResolveDisputedBuilder(BaseBuilder):
    """Settles a dispute on the admin's decision.

    The winner takes the reward and both bonds; the loser's bond is
    forfeited. The admin is the only arbiter, no evidence is evaluated.
    """

    def build(
        self,
        registry: OracleStateDatum,
        request: RequestDatum,
        caller: VerifiedCaller,
        proposer_wins: bool,
        current_time: PosixTime,
    ) -> LifecycleTxResult:
        require_principal(caller.vkh, registry.admin, "oracle admin")
        require_status(request, RequestStatus.DISPUTED)
        proposal = require_proposer(request)
        dispute = require_disputer(request)

        if proposer_wins:
            winner, loser = proposal.proposer, dispute.disputer
        else:
            winner, loser = dispute.disputer, proposal.proposer

        bond_payout = checked_mul(request.bond_amount, 2)
        payout = checked_add(request.reward_amount, bond_payout)
        logger.debug(
            "Request %d settled for %s, payout %d",
            request.request_id,
            "proposer" if proposer_wins else "disputer",
            payout,
        )

        resolved = Resolved(
            proposal=proposal,
            dispute=dispute,
            resolved_at=current_time,
            winner_pkh=winner.payload,
            payout=payout,
        )
        return LifecycleTxResult(
            request=self.with_phase(request, resolved),
            payments=[
                Payment(
                    self.pool(request, PoolRole.REWARD),
                    winner,
                    request.reward_amount,
                ),
                Payment(
                    self.pool(request, PoolRole.PROPOSAL_BOND),
                    winner,
                    request.bond_amount,
                ),
                Payment(
                    self.pool(request, PoolRole.DISPUTE_BOND),
                    winner,
                    request.bond_amount,
                ),
            ],
            event=DisputeResolved(
                request_id=request.request_id,
                winner=winner,
                loser=loser,
                proposer_wins=proposer_wins,
            ),
        )
