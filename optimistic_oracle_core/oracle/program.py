"""Optimistic oracle program: entry points over registry, requests and ledger."""

import logging
import threading

from pycardano import VerificationKeyHash

from optimistic_oracle_core.blockchain.clock import Clock, SystemClock
from optimistic_oracle_core.blockchain.events import EventLog, EventSink
from optimistic_oracle_core.blockchain.ledger import Ledger
from optimistic_oracle_core.constants.status import RequestStatus
from optimistic_oracle_core.models.base import Amount, PosixTime, PosixTimeDiff
from optimistic_oracle_core.models.escrow import EscrowPoolKey, PoolRole
from optimistic_oracle_core.models.oracle_datums import (
    AnswerType,
    OracleStateDatum,
    RequestDatum,
    decode_text,
    from_optional_text,
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
from optimistic_oracle_core.oracle.exceptions import (
    AlreadyInitializedError,
    NotInitializedError,
    SignatureError,
)
from optimistic_oracle_core.oracle.lifecycle.base import LifecycleTxResult
from optimistic_oracle_core.oracle.lifecycle.cancel_builder import CancelBuilder
from optimistic_oracle_core.oracle.lifecycle.create_builder import (
    CreateRequestBuilder,
)
from optimistic_oracle_core.oracle.lifecycle.dispute_builder import DisputeBuilder
from optimistic_oracle_core.oracle.lifecycle.propose_builder import ProposeBuilder
from optimistic_oracle_core.oracle.lifecycle.resolve_builder import (
    ResolveDisputedBuilder,
    ResolveUndisputedBuilder,
)
from optimistic_oracle_core.oracle.utils.accounting import require_drained
from optimistic_oracle_core.oracle.utils.signature_checks import (
    SignedInstruction,
    VerifiedCaller,
    verify_instruction,
)
from optimistic_oracle_core.oracle.utils.state_checks import (
    filter_requests_by_status,
    get_request,
)

logger = logging.getLogger(__name__)


class OracleProgram:
    """Ledger-resident optimistic oracle.

    Every entry point reads the clock once, builds the transition against
    the current state and commits it under a single lock: payments run in
    one ledger `atomic()` block, a terminal transition must leave the
    request's pools empty, and only then are registry and request replaced
    and the event emitted. Any failure leaves all state as it was.
    """

    def __init__(
        self,
        ledger: Ledger | None = None,
        clock: Clock | None = None,
        event_sink: EventSink | None = None,
        registry: OracleStateDatum | None = None,
        requests: dict[int, RequestDatum] | None = None,
        executed_digests: set[bytes] | None = None,
    ) -> None:
        self.ledger = ledger or Ledger()
        self.clock = clock or SystemClock()
        self.event_sink = event_sink if event_sink is not None else EventLog()
        self._registry = registry
        self._requests: dict[int, RequestDatum] = dict(requests or {})
        self._executed_digests: set[bytes] = set(executed_digests or ())
        self._pending_digest: bytes | None = None
        self._lock = threading.RLock()

    # Queries

    @property
    def is_initialized(self) -> bool:
        return self._registry is not None

    @property
    def registry(self) -> OracleStateDatum:
        if self._registry is None:
            raise NotInitializedError("Oracle registry has not been initialized")
        return self._registry

    @property
    def requests(self) -> dict[int, RequestDatum]:
        return dict(self._requests)

    @property
    def executed_digests(self) -> frozenset[bytes]:
        return frozenset(self._executed_digests)

    def get_request(self, request_id: int) -> RequestDatum:
        return get_request(self._requests, request_id)

    def list_requests(self, status: RequestStatus | None = None) -> list[RequestDatum]:
        return filter_requests_by_status(self._requests.values(), status)

    def pool_balance(self, request_id: int, role: PoolRole) -> Amount:
        return self.ledger.balance_of(EscrowPoolKey(request_id, role))

    # Entry points

    def initialize(
        self, caller: VerifiedCaller, admin: VerificationKeyHash
    ) -> OracleStateDatum:
        """One-time registry setup naming the dispute resolver."""
        with self._lock:
            if self._registry is not None:
                raise AlreadyInitializedError("Oracle registry already initialized")
            self._registry = OracleStateDatum(admin_pkh=admin.payload)
        logger.info("Optimistic oracle initialized by %s, admin %s", caller, admin)
        return self._registry

    def create_request(
        self,
        caller: VerifiedCaller,
        question: str,
        answer_type: AnswerType,
        reward_amount: Amount,
        bond_amount: Amount,
        expiry_timestamp: PosixTime,
        challenge_period: PosixTimeDiff,
        data_source: str | None = None,
        metadata: str | None = None,
    ) -> LifecycleTxResult:
        with self._lock:
            result = CreateRequestBuilder().build(
                registry=self.registry,
                caller=caller,
                question=question,
                answer_type=answer_type,
                reward_amount=reward_amount,
                bond_amount=bond_amount,
                expiry_timestamp=expiry_timestamp,
                challenge_period=challenge_period,
                current_time=self.clock.now(),
                data_source=data_source,
                metadata=metadata,
            )
            self._commit(result)
        logger.info(
            "Request %d created by %s: %s", result.request_id, caller, question
        )
        return result

    def propose_answer(
        self, caller: VerifiedCaller, request_id: int, answer: str
    ) -> LifecycleTxResult:
        with self._lock:
            result = ProposeBuilder().build(
                request=self.get_request(request_id),
                caller=caller,
                answer=answer,
                current_time=self.clock.now(),
            )
            self._commit(result)
        logger.info("Answer proposed for request %d by %s", request_id, caller)
        return result

    def dispute_answer(
        self,
        caller: VerifiedCaller,
        request_id: int,
        counter_answer: str | None = None,
    ) -> LifecycleTxResult:
        with self._lock:
            result = DisputeBuilder().build(
                request=self.get_request(request_id),
                caller=caller,
                current_time=self.clock.now(),
                counter_answer=counter_answer,
            )
            self._commit(result)
        logger.info("Answer disputed for request %d by %s", request_id, caller)
        return result

    def resolve_undisputed(
        self, caller: VerifiedCaller, request_id: int
    ) -> LifecycleTxResult:
        with self._lock:
            result = ResolveUndisputedBuilder().build(
                request=self.get_request(request_id),
                current_time=self.clock.now(),
            )
            self._commit(result)
        logger.info("Request %d resolved undisputed (triggered by %s)", request_id, caller)
        return result

    def resolve_disputed_via_vote(
        self, caller: VerifiedCaller, request_id: int, proposer_wins: bool
    ) -> LifecycleTxResult:
        with self._lock:
            result = ResolveDisputedBuilder().build(
                registry=self.registry,
                request=self.get_request(request_id),
                caller=caller,
                proposer_wins=proposer_wins,
                current_time=self.clock.now(),
            )
            self._commit(result)
        logger.info(
            "Disputed request %d resolved, proposer wins: %s", request_id, proposer_wins
        )
        return result

    def cancel_request(
        self, caller: VerifiedCaller, request_id: int
    ) -> LifecycleTxResult:
        with self._lock:
            result = CancelBuilder().build(
                request=self.get_request(request_id),
                caller=caller,
                current_time=self.clock.now(),
            )
            self._commit(result)
        logger.info("Request %d cancelled by its creator", request_id)
        return result

    def submit(
        self, signed: SignedInstruction
    ) -> LifecycleTxResult | OracleStateDatum:
        """Authenticate a signed instruction and execute it once.

        Raises:
            SignatureError: If the signature is invalid or the instruction
                was already executed
        """
        caller = verify_instruction(signed)
        digest = signed.digest
        with self._lock:
            if digest in self._executed_digests:
                raise SignatureError("Instruction has already been executed")
            self._pending_digest = digest
            try:
                result = self.execute(caller, signed.instruction.action)
            finally:
                self._pending_digest = None
            self._executed_digests.add(digest)
        return result

    def execute(
        self, caller: VerifiedCaller, action: OracleRedeemer
    ) -> LifecycleTxResult | OracleStateDatum:
        """Dispatch a decoded redeemer to its entry point."""
        if isinstance(action, Initialize):
            return self.initialize(caller, action.admin)
        if isinstance(action, CreateRequest):
            return self.create_request(
                caller,
                question=decode_text(action.question, "question"),
                answer_type=action.answer_type,
                reward_amount=action.reward_amount,
                bond_amount=action.bond_amount,
                expiry_timestamp=action.expiry_timestamp,
                challenge_period=action.challenge_period,
                data_source=from_optional_text(action.data_source),
                metadata=from_optional_text(action.metadata),
            )
        if isinstance(action, ProposeAnswer):
            return self.propose_answer(
                caller, action.request_id, decode_text(action.answer, "answer")
            )
        if isinstance(action, DisputeAnswer):
            return self.dispute_answer(
                caller, action.request_id, from_optional_text(action.counter_answer)
            )
        if isinstance(action, ResolveUndisputed):
            return self.resolve_undisputed(caller, action.request_id)
        if isinstance(action, ResolveDisputedViaVote):
            return self.resolve_disputed_via_vote(
                caller, action.request_id, bool(action.proposer_wins)
            )
        if isinstance(action, CancelRequest):
            return self.cancel_request(caller, action.request_id)
        raise TypeError(f"Unsupported instruction {type(action).__name__}")

    def _commit(self, result: LifecycleTxResult) -> None:
        request = result.request
        with self.ledger.atomic():
            for payment in result.payments:
                self.ledger.transfer(payment.source, payment.destination, payment.amount)
            if request.is_terminal:
                require_drained(self.ledger, request.request_id)
            if result.registry is not None:
                self._registry = result.registry
            self._requests[request.request_id] = request
            # Executed digest commits together with the state, before the event
            if self._pending_digest is not None:
                self._executed_digests.add(self._pending_digest)

        if result.event is not None:
            self.event_sink.emit(result.event)
