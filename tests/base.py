"""Base functionality for optimistic oracle tests."""

from typing import Any

from pycardano import PaymentSigningKey

from optimistic_oracle_core.blockchain.clock import ManualClock
from optimistic_oracle_core.blockchain.events import EventLog
from optimistic_oracle_core.blockchain.ledger import Ledger
from optimistic_oracle_core.models.escrow import PoolRole
from optimistic_oracle_core.models.oracle_datums import AnswerType, YesNo
from optimistic_oracle_core.oracle.program import OracleProgram
from optimistic_oracle_core.oracle.utils.signature_checks import (
    VerifiedCaller,
    caller_from_signing_key,
)

from .test_utils import DAY, HOUR, START_TIME, logger

INITIAL_BALANCE = 1_000_000


class TestBase:
    """Program with an admin and three funded participants on a manual clock."""

    def setup_method(self, method: Any) -> None:
        logger.info("Setting up oracle program for %s", method.__name__)
        self.clock = ManualClock(START_TIME)
        self.ledger = Ledger()
        self.events = EventLog()
        self.program = OracleProgram(
            ledger=self.ledger, clock=self.clock, event_sink=self.events
        )

        self.admin_sk = PaymentSigningKey.generate()
        self.creator_sk = PaymentSigningKey.generate()
        self.proposer_sk = PaymentSigningKey.generate()
        self.disputer_sk = PaymentSigningKey.generate()

        self.admin = caller_from_signing_key(self.admin_sk)
        self.creator = caller_from_signing_key(self.creator_sk)
        self.proposer = caller_from_signing_key(self.proposer_sk)
        self.disputer = caller_from_signing_key(self.disputer_sk)

        for participant in (self.creator, self.proposer, self.disputer):
            self.ledger.deposit(participant.vkh, INITIAL_BALANCE)

        self.program.initialize(self.admin, self.admin.vkh)

    def create_request(
        self,
        question: str = "Will it rain in Lisbon tomorrow?",
        answer_type: AnswerType | None = None,
        reward: int = 1000,
        bond: int = 200,
        expires_in: int = DAY,
        challenge_period: int = HOUR,
        **kwargs: Any,
    ) -> int:
        result = self.program.create_request(
            self.creator,
            question=question,
            answer_type=answer_type if answer_type is not None else YesNo(),
            reward_amount=reward,
            bond_amount=bond,
            expiry_timestamp=self.clock.now() + expires_in,
            challenge_period=challenge_period,
            **kwargs,
        )
        return result.request_id

    def expire(self, request_id: int) -> None:
        """Move the clock to the request's expiry timestamp."""
        self.clock.set(self.program.get_request(request_id).expiry_timestamp)

    def propose(self, request_id: int, answer: str = "YES") -> None:
        self.expire(request_id)
        self.program.propose_answer(self.proposer, request_id, answer)

    def balance(self, caller: VerifiedCaller) -> int:
        return self.ledger.balance_of(caller.vkh)

    def pool(self, request_id: int, role: PoolRole) -> int:
        return self.program.pool_balance(request_id, role)

    def total_funds(self) -> int:
        return self.ledger.total_supply()
