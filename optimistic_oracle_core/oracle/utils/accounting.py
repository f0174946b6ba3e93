"""Escrow accounting: conservation audits and drain checks."""

import logging
from dataclasses import dataclass

from optimistic_oracle_core.blockchain.ledger import AccountKey, Ledger
from optimistic_oracle_core.models.base import Amount, RequestId
from optimistic_oracle_core.models.escrow import EscrowPoolKey, PoolRole, request_pools
from optimistic_oracle_core.oracle.exceptions import ResidualBalanceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestAudit:
    """Funds that entered, left and remain in one request's escrow pools."""

    request_id: RequestId
    deposited: Amount
    paid_out: Amount
    remaining: Amount

    @property
    def is_balanced(self) -> bool:
        return self.deposited == self.paid_out + self.remaining


def _request_pool(account: AccountKey | None, request_id: RequestId) -> bool:
    return isinstance(account, EscrowPoolKey) and account.request_id == request_id


def pool_balances(ledger: Ledger, request_id: RequestId) -> dict[PoolRole, Amount]:
    return {
        role: ledger.balance_of(pool) for role, pool in request_pools(request_id).items()
    }


def locked_amount(ledger: Ledger, request_id: RequestId) -> Amount:
    """Funds currently escrowed for a request."""
    return sum(pool_balances(ledger, request_id).values())


def audit_request(ledger: Ledger, request_id: RequestId) -> RequestAudit:
    """Replay the ledger journal for one request.

    Pools never move funds to one another, so every journal entry touching a
    request's pools is either a deposit into them or a payout from them.
    """
    deposited = 0
    paid_out = 0
    for record in ledger.journal:
        if _request_pool(record.destination, request_id):
            deposited += record.amount
        if _request_pool(record.source, request_id):
            paid_out += record.amount

    return RequestAudit(
        request_id=request_id,
        deposited=deposited,
        paid_out=paid_out,
        remaining=locked_amount(ledger, request_id),
    )


def received_from_request(
    ledger: Ledger, request_id: RequestId, principal: AccountKey
) -> Amount:
    """Total paid out of a request's pools to one principal."""
    return sum(
        record.amount
        for record in ledger.journal
        if _request_pool(record.source, request_id) and record.destination == principal
    )


def require_drained(ledger: Ledger, request_id: RequestId) -> None:
    """Post-condition of every terminal transition: all pools at zero.

    Raises:
        ResidualBalanceError: If any pool of the request still holds funds
    """
    residual = {
        role.value: amount
        for role, amount in pool_balances(ledger, request_id).items()
        if amount
    }
    if residual:
        logger.error("Request %d left residual escrow %s", request_id, residual)
        raise ResidualBalanceError(
            f"Request {request_id} escrow not drained: {residual}"
        )
