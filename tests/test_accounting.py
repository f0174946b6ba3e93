"""Tests for escrow audits and request statistics."""

import pytest

from optimistic_oracle_core.models.escrow import EscrowPoolKey, PoolRole
from optimistic_oracle_core.oracle.exceptions import ResidualBalanceError
from optimistic_oracle_core.oracle.utils.accounting import (
    audit_request,
    locked_amount,
    received_from_request,
    require_drained,
)
from optimistic_oracle_core.oracle.utils.stats import proposer_stats, request_stats

from .base import TestBase
from .test_utils import HOUR


class TestAudit(TestBase):
    def test_open_request_is_balanced(self) -> None:
        request_id = self.create_request(reward=1000, bond=200)
        self.propose(request_id)

        audit = audit_request(self.ledger, request_id)

        assert audit.deposited == 1200
        assert audit.paid_out == 0
        assert audit.remaining == 1200
        assert audit.is_balanced
        assert locked_amount(self.ledger, request_id) == 1200

    def test_settled_request_pays_everything_out(self) -> None:
        request_id = self.create_request(reward=1000, bond=200)
        self.propose(request_id)
        self.program.dispute_answer(self.disputer, request_id)
        self.program.resolve_disputed_via_vote(self.admin, request_id, True)

        audit = audit_request(self.ledger, request_id)

        assert audit.deposited == audit.paid_out == 1400
        assert audit.remaining == 0
        assert received_from_request(self.ledger, request_id, self.proposer.vkh) == 1400
        assert received_from_request(self.ledger, request_id, self.disputer.vkh) == 0

    def test_audits_are_scoped_to_one_request(self) -> None:
        first = self.create_request(reward=100)
        second = self.create_request(reward=900)

        assert audit_request(self.ledger, first).deposited == 100
        assert audit_request(self.ledger, second).deposited == 900

    def test_require_drained(self) -> None:
        request_id = self.create_request(reward=100)

        with pytest.raises(ResidualBalanceError):
            require_drained(self.ledger, request_id)

        self.ledger.transfer(
            EscrowPoolKey(request_id, PoolRole.REWARD), self.creator.vkh, 100
        )
        require_drained(self.ledger, request_id)


class TestStats(TestBase):
    def test_request_stats(self) -> None:
        cancelled = self.create_request(reward=100)
        self.program.cancel_request(self.creator, cancelled)
        resolved = self.create_request(reward=200, bond=50)
        self.propose(resolved)
        self.clock.advance(HOUR + 1)
        self.program.resolve_undisputed(self.creator, resolved)
        disputed = self.create_request(reward=300, bond=50)
        self.propose(disputed)
        self.program.dispute_answer(self.disputer, disputed)
        self.create_request(reward=400)

        stats = request_stats(
            self.program.registry, self.program.list_requests(), self.ledger
        )

        assert stats.total == 4
        assert stats.active == 1
        assert stats.proposed == 0
        assert stats.disputed == 1
        assert stats.resolved == 1
        assert stats.cancelled == 1
        assert stats.total_volume == 1000
        assert stats.total_locked == 300 + 50 + 50 + 400

    def test_proposer_stats(self) -> None:
        won = self.create_request(reward=200, bond=50)
        self.propose(won)
        self.clock.advance(HOUR + 1)
        self.program.resolve_undisputed(self.creator, won)

        lost = self.create_request(reward=300, bond=50)
        self.propose(lost)
        self.program.dispute_answer(self.disputer, lost)
        self.program.resolve_disputed_via_vote(self.admin, lost, False)

        stats = proposer_stats(self.program.list_requests(), self.proposer.vkh)

        assert stats.proposer == self.proposer.vkh.payload.hex()
        assert stats.total_proposals == 2
        assert stats.successful_proposals == 1
        assert stats.total_earnings == 250
        assert stats.success_rate == pytest.approx(0.5)

    def test_stats_for_unknown_proposer(self) -> None:
        stats = proposer_stats(self.program.list_requests(), self.admin.vkh)

        assert stats.total_proposals == 0
        assert stats.success_rate == 0.0
