"""Cancel request transition builder."""

from optimistic_oracle_core.models.base import PosixTime
from optimistic_oracle_core.models.escrow import PoolRole
from optimistic_oracle_core.models.oracle_datums import Cancelled, RequestDatum
from optimistic_oracle_core.oracle.lifecycle.base import (
    BaseBuilder,
    LifecycleTxResult,
    Payment,
)
from optimistic_oracle_core.oracle.utils.signature_checks import VerifiedCaller
from optimistic_oracle_core.oracle.utils.state_checks import (
    require_cancellable,
    require_principal,
)


class CancelBuilder(BaseBuilder):
    """Builds the refund of an unanswered request"""

    def build(
        self,
        request: RequestDatum,
        caller: VerifiedCaller,
        current_time: PosixTime,
    ) -> LifecycleTxResult:
        require_cancellable(request)
        require_principal(caller.vkh, request.creator, "request creator")

        return LifecycleTxResult(
            request=self.with_phase(request, Cancelled(cancelled_at=current_time)),
            payments=[
                Payment(
                    self.pool(request, PoolRole.REWARD),
                    request.creator,
                    request.reward_amount,
                )
            ],
        )
