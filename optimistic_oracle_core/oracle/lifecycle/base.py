"""Base classes for request lifecycle transitions."""

from copy import deepcopy
from dataclasses import dataclass, field

from optimistic_oracle_core.blockchain.ledger import AccountKey
from optimistic_oracle_core.models.base import Amount
from optimistic_oracle_core.models.escrow import EscrowPoolKey, PoolRole
from optimistic_oracle_core.models.events import OracleEvent
from optimistic_oracle_core.models.oracle_datums import (
    OracleStateDatum,
    RequestDatum,
    RequestPhase,
)


@dataclass(frozen=True)
class Payment:
    """A single balance movement a transition requires."""

    source: AccountKey
    destination: AccountKey
    amount: Amount


@dataclass
class LifecycleTxResult:
    """Result of a lifecycle transition build.

    Nothing here has touched the ledger yet. The program applies the
    payments, stores the request and registry, then emits the event.
    """

    request: RequestDatum
    payments: list[Payment] = field(default_factory=list)
    event: OracleEvent | None = None
    registry: OracleStateDatum | None = None

    @property
    def request_id(self) -> int:
        return self.request.request_id


class BaseBuilder:
    """Base builder for lifecycle transitions.

    Builders are pure: they validate against the state and time handed to
    them and describe the outcome. They never read the clock or the ledger.
    """

    @staticmethod
    def with_phase(request: RequestDatum, phase: RequestPhase) -> RequestDatum:
        """Copy of the request moved into a new phase."""
        updated = deepcopy(request)
        updated.phase = phase
        return updated

    @staticmethod
    def pool(request: RequestDatum, role: PoolRole) -> EscrowPoolKey:
        return EscrowPoolKey(request.request_id, role)
