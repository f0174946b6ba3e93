"""Dispute answer transition builder."""

import logging

from optimistic_oracle_core.constants.status import RequestStatus
from optimistic_oracle_core.models.base import PosixTime
from optimistic_oracle_core.models.escrow import PoolRole
from optimistic_oracle_core.models.events import AnswerDisputed
from optimistic_oracle_core.models.oracle_datums import (
    Dispute,
    Disputed,
    RequestDatum,
)
from optimistic_oracle_core.oracle.lifecycle.base import (
    BaseBuilder,
    LifecycleTxResult,
    Payment,
)
from optimistic_oracle_core.oracle.utils.signature_checks import VerifiedCaller
from optimistic_oracle_core.oracle.utils.state_checks import (
    require_proposal,
    require_status,
)
from optimistic_oracle_core.oracle.utils.time_checks import require_challenge_open

logger = logging.getLogger(__name__)


class DisputeBuilder(BaseBuilder):
    """Builds the bonded challenge of a proposal"""

    def build(
        self,
        request: RequestDatum,
        caller: VerifiedCaller,
        current_time: PosixTime,
        counter_answer: str | None = None,
    ) -> LifecycleTxResult:
        require_status(request, RequestStatus.PROPOSED)
        proposal = require_proposal(request)
        require_challenge_open(
            proposal.proposal_time, request.challenge_period, current_time
        )

        if counter_answer is not None:
            # Informational only; not part of the request state
            logger.info(
                "Request %d disputed by %s with counter answer '%s'",
                request.request_id,
                caller,
                counter_answer,
            )

        dispute = Dispute(disputer_pkh=caller.vkh.payload, dispute_time=current_time)
        return LifecycleTxResult(
            request=self.with_phase(
                request, Disputed(proposal=proposal, dispute=dispute)
            ),
            payments=[
                Payment(
                    caller.vkh,
                    self.pool(request, PoolRole.DISPUTE_BOND),
                    request.bond_amount,
                )
            ],
            event=AnswerDisputed(
                request_id=request.request_id,
                disputer=caller.vkh,
                dispute_time=current_time,
            ),
        )
