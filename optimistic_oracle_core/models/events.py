"""Notifications emitted by successful request transitions.

Exactly one event is emitted per committed transition (none for
cancellation), after balances and state have been updated. Indexers rely on
the field sets below.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, ClassVar

from pycardano import VerificationKeyHash

from optimistic_oracle_core.models.base import Amount, PosixTime, RequestId


@dataclass(frozen=True, kw_only=True)
class OracleEvent:
    """Base class for program events."""

    NAME: ClassVar[str] = "OracleEvent"

    request_id: RequestId

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict with hex principals."""
        data = {}
        for key, value in asdict(self).items():
            if isinstance(value, VerificationKeyHash):
                value = value.payload.hex()
            data[key] = value
        return {"event": self.NAME, **data}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OracleEvent":
        """Rebuild an event from its serialized form."""
        event_cls = EVENT_TYPES[data["event"]]
        kwargs = {}
        for f in fields(event_cls):
            value = data[f.name]
            if f.metadata.get("principal"):
                value = VerificationKeyHash(bytes.fromhex(value))
            kwargs[f.name] = value
        return event_cls(**kwargs)


def _principal() -> Any:
    return field(metadata={"principal": True})


@dataclass(frozen=True, kw_only=True)
class RequestCreated(OracleEvent):
    NAME: ClassVar[str] = "RequestCreated"

    creator: VerificationKeyHash = _principal()
    question: str
    reward_amount: Amount
    bond_amount: Amount
    expiry_timestamp: PosixTime


@dataclass(frozen=True, kw_only=True)
class AnswerProposed(OracleEvent):
    NAME: ClassVar[str] = "AnswerProposed"

    proposer: VerificationKeyHash = _principal()
    answer: str
    proposal_time: PosixTime


@dataclass(frozen=True, kw_only=True)
class AnswerDisputed(OracleEvent):
    NAME: ClassVar[str] = "AnswerDisputed"

    disputer: VerificationKeyHash = _principal()
    dispute_time: PosixTime


@dataclass(frozen=True, kw_only=True)
class RequestResolved(OracleEvent):
    """Undisputed settlement in favour of the proposer."""

    NAME: ClassVar[str] = "RequestResolved"

    answer: str
    winner: VerificationKeyHash = _principal()
    payout: Amount


@dataclass(frozen=True, kw_only=True)
class DisputeResolved(OracleEvent):
    """Resolver settlement of a disputed request."""

    NAME: ClassVar[str] = "DisputeResolved"

    winner: VerificationKeyHash = _principal()
    loser: VerificationKeyHash = _principal()
    proposer_wins: bool


EVENT_TYPES: dict[str, type[OracleEvent]] = {
    cls.NAME: cls
    for cls in (
        RequestCreated,
        AnswerProposed,
        AnswerDisputed,
        RequestResolved,
        DisputeResolved,
    )
}
