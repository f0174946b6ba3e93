"""Create request transition builder."""

import logging
from copy import deepcopy

from optimistic_oracle_core.models.base import PosixTime, PosixTimeDiff
from optimistic_oracle_core.models.escrow import EscrowPoolKey, PoolRole
from optimistic_oracle_core.models.events import RequestCreated
from optimistic_oracle_core.models.oracle_datums import (
    AnswerType,
    Created,
    OracleStateDatum,
    RequestDatum,
    encode_text,
    to_optional_text,
)
from optimistic_oracle_core.oracle.exceptions import InvalidBond, InvalidReward
from optimistic_oracle_core.oracle.lifecycle.base import (
    BaseBuilder,
    LifecycleTxResult,
    Payment,
)
from optimistic_oracle_core.oracle.utils.answer_checks import validate_question
from optimistic_oracle_core.oracle.utils.signature_checks import VerifiedCaller
from optimistic_oracle_core.oracle.utils.time_checks import (
    validate_challenge_period,
    validate_expiry,
)
from optimistic_oracle_core.oracle.utils.value_checks import is_u64

logger = logging.getLogger(__name__)


class CreateRequestBuilder(BaseBuilder):
    """Builds a new request and the reward deposit that funds it"""

    def build(
        self,
        registry: OracleStateDatum,
        caller: VerifiedCaller,
        question: str,
        answer_type: AnswerType,
        reward_amount: int,
        bond_amount: int,
        expiry_timestamp: PosixTime,
        challenge_period: PosixTimeDiff,
        current_time: PosixTime,
        data_source: str | None = None,
        metadata: str | None = None,
    ) -> LifecycleTxResult:
        validate_question(question)
        if not is_u64(reward_amount) or reward_amount == 0:
            raise InvalidReward(f"Reward must be a positive amount, got {reward_amount}")
        if not is_u64(bond_amount) or bond_amount == 0:
            raise InvalidBond(f"Bond must be a positive amount, got {bond_amount}")
        validate_expiry(expiry_timestamp, current_time)
        validate_challenge_period(challenge_period)

        updated_registry = deepcopy(registry)
        request_id = updated_registry.register_request(reward_amount)

        request = RequestDatum(
            request_id=request_id,
            creator_pkh=caller.vkh.payload,
            question=encode_text(question),
            answer_type=answer_type,
            reward_amount=reward_amount,
            bond_amount=bond_amount,
            expiry_timestamp=expiry_timestamp,
            challenge_period=challenge_period,
            data_source=to_optional_text(data_source),
            metadata=to_optional_text(metadata),
            created_at=current_time,
            phase=Created(),
        )
        logger.debug("Built request %d for creator %s", request_id, caller)

        return LifecycleTxResult(
            request=request,
            payments=[
                Payment(
                    caller.vkh,
                    EscrowPoolKey(request_id, PoolRole.REWARD),
                    reward_amount,
                )
            ],
            event=RequestCreated(
                request_id=request_id,
                creator=caller.vkh,
                question=question,
                reward_amount=reward_amount,
                bond_amount=bond_amount,
                expiry_timestamp=expiry_timestamp,
            ),
            registry=updated_registry,
        )
