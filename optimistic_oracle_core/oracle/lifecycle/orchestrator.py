"""Oracle request orchestrator for interactive callers."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from pycardano import ExtendedSigningKey, PaymentSigningKey, VerificationKeyHash

from optimistic_oracle_core.constants.status import ProcessStatus
from optimistic_oracle_core.models.base import Amount, PosixTime, PosixTimeDiff
from optimistic_oracle_core.models.events import OracleEvent
from optimistic_oracle_core.models.oracle_datums import (
    AnswerType,
    OracleStateDatum,
    RequestDatum,
    encode_text,
    to_optional_text,
)
from optimistic_oracle_core.models.oracle_redeemers import (
    CancelRequest,
    CreateRequest,
    DisputeAnswer,
    Initialize,
    OracleRedeemer,
    ProposeAnswer,
    ResolveDisputedViaVote,
    ResolveUndisputed,
)
from optimistic_oracle_core.oracle.exceptions import OracleError
from optimistic_oracle_core.oracle.lifecycle.base import LifecycleTxResult
from optimistic_oracle_core.oracle.program import OracleProgram
from optimistic_oracle_core.oracle.utils.signature_checks import sign_instruction

logger = logging.getLogger(__name__)

SigningKey = PaymentSigningKey | ExtendedSigningKey


@dataclass
class OracleResult:
    """Result of an orchestrated oracle operation"""

    status: ProcessStatus
    request: RequestDatum | None = None
    event: OracleEvent | None = None
    registry: OracleStateDatum | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status == ProcessStatus.COMPLETED


class OracleOrchestrator:
    """Signs instructions with the caller's key and submits them to the program"""

    def __init__(
        self,
        program: OracleProgram,
        status_callback: Callable | None = None,
    ) -> None:
        self.program = program
        self.status_callback = status_callback
        self.current_status = ProcessStatus.NOT_STARTED

    def _update_status(self, status: ProcessStatus, message: str = "") -> None:
        self.current_status = status
        if self.status_callback:
            self.status_callback(status, message)

    def _submit(
        self, action: OracleRedeemer, signing_key: SigningKey, operation: str
    ) -> OracleResult:
        try:
            self._update_status(
                ProcessStatus.SIGNING_INSTRUCTION, f"Signing {operation} instruction"
            )
            signed = sign_instruction(action, signing_key)
            self._update_status(
                ProcessStatus.INSTRUCTION_SIGNED, f"Instruction {signed.digest.hex()}"
            )

            self._update_status(
                ProcessStatus.SUBMITTING_INSTRUCTION, f"Submitting {operation}"
            )
            outcome = self.program.submit(signed)

        except OracleError as e:
            logger.warning("%s rejected: %s", operation.capitalize(), e)
            self._update_status(ProcessStatus.REJECTED, f"{operation} rejected: {e!s}")
            return OracleResult(status=ProcessStatus.REJECTED, error=e)
        except Exception as e:
            logger.error("%s failed: %s", operation.capitalize(), e, exc_info=True)
            self._update_status(ProcessStatus.FAILED, f"{operation} failed: {e!s}")
            return OracleResult(status=ProcessStatus.FAILED, error=e)

        self._update_status(ProcessStatus.COMPLETED, f"{operation} completed")
        if isinstance(outcome, LifecycleTxResult):
            return OracleResult(
                status=ProcessStatus.COMPLETED,
                request=outcome.request,
                event=outcome.event,
                registry=outcome.registry,
            )
        return OracleResult(status=ProcessStatus.COMPLETED, registry=outcome)

    def initialize(
        self, signing_key: SigningKey, admin: VerificationKeyHash
    ) -> OracleResult:
        return self._submit(Initialize(admin_pkh=admin.payload), signing_key, "initialize")

    def create_request(
        self,
        signing_key: SigningKey,
        question: str,
        answer_type: AnswerType,
        reward_amount: Amount,
        bond_amount: Amount,
        expiry_timestamp: PosixTime,
        challenge_period: PosixTimeDiff,
        data_source: str | None = None,
        metadata: str | None = None,
    ) -> OracleResult:
        """Post a new question and escrow its reward.

        Args:
            signing_key: Creator's signing key
            question: Question text
            answer_type: Expected answer format
            reward_amount: Reward paid to the eventual winner
            bond_amount: Bond required from proposer and disputer
            expiry_timestamp: Time after which answers are accepted
            challenge_period: Seconds a proposal stays open to dispute
            data_source: Optional data source hint
            metadata: Optional free-form metadata

        Returns:
            OracleResult containing the created request
        """
        action = CreateRequest(
            question=encode_text(question),
            answer_type=answer_type,
            reward_amount=reward_amount,
            bond_amount=bond_amount,
            expiry_timestamp=expiry_timestamp,
            challenge_period=challenge_period,
            data_source=to_optional_text(data_source),
            metadata=to_optional_text(metadata),
        )
        return self._submit(action, signing_key, "create request")

    def propose_answer(
        self, signing_key: SigningKey, request_id: int, answer: str
    ) -> OracleResult:
        action = ProposeAnswer(request_id=request_id, answer=encode_text(answer))
        return self._submit(action, signing_key, "propose answer")

    def dispute_answer(
        self,
        signing_key: SigningKey,
        request_id: int,
        counter_answer: str | None = None,
    ) -> OracleResult:
        action = DisputeAnswer(
            request_id=request_id, counter_answer=to_optional_text(counter_answer)
        )
        return self._submit(action, signing_key, "dispute answer")

    def resolve_undisputed(
        self, signing_key: SigningKey, request_id: int
    ) -> OracleResult:
        return self._submit(
            ResolveUndisputed(request_id=request_id), signing_key, "resolve request"
        )

    def resolve_disputed_via_vote(
        self, signing_key: SigningKey, request_id: int, proposer_wins: bool
    ) -> OracleResult:
        action = ResolveDisputedViaVote(
            request_id=request_id, proposer_wins=int(proposer_wins)
        )
        return self._submit(action, signing_key, "resolve dispute")

    def cancel_request(self, signing_key: SigningKey, request_id: int) -> OracleResult:
        return self._submit(
            CancelRequest(request_id=request_id), signing_key, "cancel request"
        )
