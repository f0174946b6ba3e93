"""Tests for the ledger substrate."""

import pytest
from pycardano import PaymentSigningKey

from optimistic_oracle_core.blockchain.ledger import (
    Ledger,
    TransferRecord,
    account_from_label,
    account_label,
)
from optimistic_oracle_core.models.base import U64_MAX
from optimistic_oracle_core.models.escrow import EscrowPoolKey, PoolRole
from optimistic_oracle_core.oracle.exceptions import (
    AccountingError,
    ArithmeticOverflowError,
    InsufficientFundsError,
)


class TestLedger:
    def setup_method(self) -> None:
        self.ledger = Ledger()
        self.alice = PaymentSigningKey.generate().to_verification_key().hash()
        self.bob = PaymentSigningKey.generate().to_verification_key().hash()
        self.pool = EscrowPoolKey(1, PoolRole.REWARD)
        self.ledger.deposit(self.alice, 500)

    def test_transfer_moves_funds(self) -> None:
        self.ledger.transfer(self.alice, self.pool, 200)

        assert self.ledger.balance_of(self.alice) == 300
        assert self.ledger.balance_of(self.pool) == 200
        assert self.ledger.total_supply() == 500

    def test_transfer_insufficient_funds(self) -> None:
        with pytest.raises(InsufficientFundsError):
            self.ledger.transfer(self.alice, self.bob, 501)

        assert self.ledger.balance_of(self.alice) == 500
        assert self.ledger.balance_of(self.bob) == 0
        assert len(self.ledger.journal) == 1

    def test_credit_overflow_leaves_debit_untouched(self) -> None:
        self.ledger.deposit(self.bob, U64_MAX)

        with pytest.raises(ArithmeticOverflowError):
            self.ledger.transfer(self.alice, self.bob, 1)

        assert self.ledger.balance_of(self.alice) == 500
        assert self.ledger.balance_of(self.bob) == U64_MAX

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_amounts_rejected(self, amount: int) -> None:
        with pytest.raises(AccountingError):
            self.ledger.transfer(self.alice, self.bob, amount)
        with pytest.raises(AccountingError):
            self.ledger.deposit(self.bob, amount)

    def test_self_transfer_rejected(self) -> None:
        with pytest.raises(AccountingError):
            self.ledger.transfer(self.alice, self.alice, 10)
        assert self.ledger.balance_of(self.alice) == 500

    def test_atomic_rolls_back_every_transfer(self) -> None:
        with pytest.raises(InsufficientFundsError):
            with self.ledger.atomic():
                self.ledger.transfer(self.alice, self.pool, 400)
                self.ledger.transfer(self.alice, self.bob, 400)

        assert self.ledger.balance_of(self.alice) == 500
        assert self.ledger.balance_of(self.pool) == 0
        assert len(self.ledger.journal) == 1

    def test_atomic_commits_on_success(self) -> None:
        with self.ledger.atomic():
            self.ledger.transfer(self.alice, self.pool, 100)
            self.ledger.transfer(self.pool, self.bob, 100)

        assert self.ledger.balance_of(self.bob) == 100
        assert [r.amount for r in self.ledger.journal] == [500, 100, 100]

    def test_journal_records_deposits_without_source(self) -> None:
        (record,) = self.ledger.journal
        assert record.source is None
        assert record.destination == self.alice


class TestAccountLabels:
    def test_principal_label(self) -> None:
        vkh = PaymentSigningKey.generate().to_verification_key().hash()
        label = account_label(vkh)

        assert label == f"vkh:{vkh.payload.hex()}"
        assert account_from_label(label) == vkh

    def test_pool_label(self) -> None:
        pool = EscrowPoolKey(42, PoolRole.DISPUTE_BOND)

        assert account_label(pool) == "escrow:42:dispute_bond"
        assert account_from_label("escrow:42:dispute_bond") == pool

    def test_invalid_label(self) -> None:
        with pytest.raises(ValueError):
            account_from_label("wallet:abc")

    def test_transfer_record_dict(self) -> None:
        pool = EscrowPoolKey(3, PoolRole.REWARD)
        data = TransferRecord(None, pool, 10).to_dict()

        assert data == {"source": None, "destination": "escrow:3:reward", "amount": 10}
        assert TransferRecord.from_dict(data) == TransferRecord(None, pool, 10)
