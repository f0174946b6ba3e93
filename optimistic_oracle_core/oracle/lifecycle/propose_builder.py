"""Propose answer transition builder."""

from optimistic_oracle_core.constants.status import RequestStatus
from optimistic_oracle_core.models.base import PosixTime
from optimistic_oracle_core.models.escrow import PoolRole
from optimistic_oracle_core.models.events import AnswerProposed
from optimistic_oracle_core.models.oracle_datums import (
    Proposal,
    Proposed,
    RequestDatum,
    encode_text,
)
from optimistic_oracle_core.oracle.lifecycle.base import (
    BaseBuilder,
    LifecycleTxResult,
    Payment,
)
from optimistic_oracle_core.oracle.utils.answer_checks import validate_answer
from optimistic_oracle_core.oracle.utils.signature_checks import VerifiedCaller
from optimistic_oracle_core.oracle.utils.state_checks import require_status
from optimistic_oracle_core.oracle.utils.time_checks import require_expired


class ProposeBuilder(BaseBuilder):
    """Builds the bonded proposal of an answer"""

    def build(
        self,
        request: RequestDatum,
        caller: VerifiedCaller,
        answer: str,
        current_time: PosixTime,
    ) -> LifecycleTxResult:
        require_status(request, RequestStatus.CREATED)
        require_expired(request.expiry_timestamp, current_time)
        validate_answer(answer, request.answer_type)

        proposal = Proposal(
            proposer_pkh=caller.vkh.payload,
            proposal_time=current_time,
            answer=encode_text(answer),
        )
        return LifecycleTxResult(
            request=self.with_phase(request, Proposed(proposal=proposal)),
            payments=[
                Payment(
                    caller.vkh,
                    self.pool(request, PoolRole.PROPOSAL_BOND),
                    request.bond_amount,
                )
            ],
            event=AnswerProposed(
                request_id=request.request_id,
                proposer=caller.vkh,
                answer=answer,
                proposal_time=current_time,
            ),
        )
