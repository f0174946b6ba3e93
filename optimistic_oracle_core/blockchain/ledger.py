"""In-process ledger substrate: account balances and atomic transfers."""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Union

from pycardano import VerificationKeyHash

from optimistic_oracle_core.models.base import Amount
from optimistic_oracle_core.models.escrow import EscrowPoolKey
from optimistic_oracle_core.oracle.exceptions import AccountingError
from optimistic_oracle_core.oracle.utils.value_checks import checked_add, checked_sub

logger = logging.getLogger(__name__)

AccountKey = Union[VerificationKeyHash, EscrowPoolKey]


def account_label(account: AccountKey) -> str:
    """Stable text form of an account, used for persistence and display."""
    if isinstance(account, EscrowPoolKey):
        return account.label
    return f"vkh:{account.payload.hex()}"


def account_from_label(label: str) -> AccountKey:
    if label.startswith("vkh:"):
        return VerificationKeyHash(bytes.fromhex(label[4:]))
    return EscrowPoolKey.from_label(label)


@dataclass(frozen=True)
class TransferRecord:
    """Journal entry for a committed balance movement."""

    source: AccountKey | None  # None for a faucet deposit
    destination: AccountKey
    amount: Amount

    def to_dict(self) -> dict:
        return {
            "source": account_label(self.source) if self.source is not None else None,
            "destination": account_label(self.destination),
            "amount": self.amount,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TransferRecord":
        source = data.get("source")
        return cls(
            source=account_from_label(source) if source is not None else None,
            destination=account_from_label(data["destination"]),
            amount=int(data["amount"]),
        )


class Ledger:
    """Balance store with an all-or-nothing transfer primitive.

    Every balance is a u64. `transfer` debits and credits in one step: both
    new balances are computed before either is written, so a failed credit
    never leaves a completed debit behind. Transitions that move funds more
    than once wrap their transfers in `atomic()`, which restores balances
    and journal if anything inside the block raises.
    """

    def __init__(
        self,
        balances: dict[AccountKey, Amount] | None = None,
        journal: list[TransferRecord] | None = None,
    ) -> None:
        self._balances: dict[AccountKey, Amount] = dict(balances or {})
        self._journal: list[TransferRecord] = list(journal or [])
        self._lock = threading.RLock()

    @property
    def journal(self) -> tuple[TransferRecord, ...]:
        return tuple(self._journal)

    @property
    def balances(self) -> dict[AccountKey, Amount]:
        return dict(self._balances)

    def balance_of(self, account: AccountKey) -> Amount:
        return self._balances.get(account, 0)

    def total_supply(self) -> Amount:
        return sum(self._balances.values())

    def deposit(self, account: AccountKey, amount: Amount) -> Amount:
        """Mint funds into an account (local faucet)."""
        if amount <= 0:
            raise AccountingError("Deposit amount must be positive")
        with self._lock:
            new_balance = checked_add(self.balance_of(account), amount)
            self._balances[account] = new_balance
            self._journal.append(TransferRecord(None, account, amount))
        logger.debug("Deposited %d into %s", amount, account_label(account))
        return new_balance

    def transfer(
        self, source: AccountKey, destination: AccountKey, amount: Amount
    ) -> None:
        """Move funds between two accounts.

        Raises:
            InsufficientFundsError: If source holds less than amount
            ArithmeticOverflowError: If destination would exceed u64
        """
        if amount <= 0:
            raise AccountingError("Transfer amount must be positive")
        with self._lock:
            if source == destination:
                raise AccountingError("Source and destination are the same account")
            new_source = checked_sub(self.balance_of(source), amount)
            new_destination = checked_add(self.balance_of(destination), amount)
            self._balances[source] = new_source
            self._balances[destination] = new_destination
            self._journal.append(TransferRecord(source, destination, amount))
        logger.debug(
            "Transferred %d from %s to %s",
            amount,
            account_label(source),
            account_label(destination),
        )

    @contextmanager
    def atomic(self) -> Iterator["Ledger"]:
        """Run several transfers as one unit, rolling back on any error."""
        with self._lock:
            balances = dict(self._balances)
            journal_length = len(self._journal)
            try:
                yield self
            except BaseException:
                self._balances = balances
                del self._journal[journal_length:]
                logger.debug("Rolled back ledger to %d journal entries", journal_length)
                raise
