"""Datums for the optimistic oracle registry and requests"""

from dataclasses import dataclass
from typing import Union

from pycardano import PlutusData, VerificationKeyHash
from pycardano.serialization import ByteString

from optimistic_oracle_core.constants.status import RequestStatus
from optimistic_oracle_core.models.base import (
    Amount,
    PosixTime,
    PosixTimeDiff,
    PubKeyHash,
    RequestId,
)
from optimistic_oracle_core.oracle.exceptions import InvalidText
from optimistic_oracle_core.oracle.utils.value_checks import checked_add

MAX_QUESTION_LENGTH: int = 500
MAX_ANSWER_LENGTH: int = 200
MIN_CHALLENGE_PERIOD: PosixTimeDiff = 3600
MAX_CHALLENGE_PERIOD: PosixTimeDiff = 604800


def encode_text(text: str) -> ByteString:
    """UTF-8 text as a datum byte string (chunked when over 64 bytes)."""
    return ByteString(text.encode("utf-8"))


def decode_text(data: ByteString | bytes, what: str = "text") -> str:
    """Decode a datum byte string.

    Raises:
        InvalidText: If the bytes are not valid UTF-8
    """
    raw = data.value if isinstance(data, ByteString) else data
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidText(f"The {what} is not valid UTF-8") from e


@dataclass
class NoDatum(PlutusData):
    """Universal None type for PlutusData"""

    CONSTR_ID = 1


@dataclass
class SomeText(PlutusData):
    """UTF-8 text in a wrapper"""

    CONSTR_ID = 0
    value: ByteString

    @property
    def text(self) -> str:
        return decode_text(self.value)


OptionalText = Union[SomeText, NoDatum]


def to_optional_text(value: str | None) -> OptionalText:
    """Wrap optional text for storage in a datum."""
    if value is None:
        return NoDatum()
    return SomeText(encode_text(value))


def from_optional_text(value: OptionalText) -> str | None:
    """Unwrap optional text stored in a datum."""
    if isinstance(value, SomeText):
        return value.text
    return None


# Answer type variants
@dataclass
class YesNo(PlutusData):
    """Answer must be exactly YES or NO"""

    CONSTR_ID = 0


@dataclass
class MultipleChoice(PlutusData):
    """Answer may be any string"""

    CONSTR_ID = 1


@dataclass
class Numeric(PlutusData):
    """Answer must parse as a floating-point number"""

    CONSTR_ID = 2


AnswerType = Union[YesNo, MultipleChoice, Numeric]

ANSWER_TYPES: dict[str, type] = {
    "yes_no": YesNo,
    "multiple_choice": MultipleChoice,
    "numeric": Numeric,
}


def answer_type_from_name(name: str) -> AnswerType:
    """Build an answer type variant from its snake_case name."""
    try:
        return ANSWER_TYPES[name.lower().replace("-", "_")]()
    except KeyError as e:
        raise ValueError(
            f"Unknown answer type '{name}', expected one of {sorted(ANSWER_TYPES)}"
        ) from e


def answer_type_name(answer_type: AnswerType) -> str:
    for name, cls in ANSWER_TYPES.items():
        if isinstance(answer_type, cls):
            return name
    raise ValueError(f"Not an answer type: {answer_type!r}")


@dataclass
class Proposal(PlutusData):
    """Answer proposed under bond"""

    CONSTR_ID = 0
    proposer_pkh: PubKeyHash
    proposal_time: PosixTime
    answer: ByteString

    @property
    def proposer(self) -> VerificationKeyHash:
        return VerificationKeyHash(self.proposer_pkh)

    @property
    def answer_text(self) -> str:
        return decode_text(self.answer, "answer")


@dataclass
class Dispute(PlutusData):
    """Challenge raised against a proposal under bond"""

    CONSTR_ID = 0
    disputer_pkh: PubKeyHash
    dispute_time: PosixTime

    @property
    def disputer(self) -> VerificationKeyHash:
        return VerificationKeyHash(self.disputer_pkh)


OptionalDispute = Union[Dispute, NoDatum]


# Request phase variants
@dataclass
class Created(PlutusData):
    """Reward escrowed, waiting for a proposal"""

    CONSTR_ID = 0


@dataclass
class Proposed(PlutusData):
    """Proposal bonded, challenge window running"""

    CONSTR_ID = 1
    proposal: Proposal


@dataclass
class Disputed(PlutusData):
    """Both bonds posted, waiting for the resolver"""

    CONSTR_ID = 2
    proposal: Proposal
    dispute: Dispute


@dataclass
class Resolved(PlutusData):
    """Escrow paid out to the winner"""

    CONSTR_ID = 3
    proposal: Proposal
    dispute: OptionalDispute
    resolved_at: PosixTime
    winner_pkh: PubKeyHash
    payout: Amount

    @property
    def winner(self) -> VerificationKeyHash:
        return VerificationKeyHash(self.winner_pkh)


@dataclass
class Cancelled(PlutusData):
    """Reward refunded to the creator"""

    CONSTR_ID = 4
    cancelled_at: PosixTime


RequestPhase = Union[Created, Proposed, Disputed, Resolved, Cancelled]

_PHASE_STATUS: dict[type, RequestStatus] = {
    Created: RequestStatus.CREATED,
    Proposed: RequestStatus.PROPOSED,
    Disputed: RequestStatus.DISPUTED,
    Resolved: RequestStatus.RESOLVED,
    Cancelled: RequestStatus.CANCELLED,
}


@dataclass
class RequestDatum(PlutusData):
    """A single oracle question together with its lifecycle phase.

    Fields set at creation never change. Everything a transition produces
    (proposal, dispute, resolution) lives inside the phase variant, so a
    request cannot hold a disputer without a proposer or a resolution time
    without a resolution.
    """

    CONSTR_ID = 0
    request_id: RequestId
    creator_pkh: PubKeyHash
    question: ByteString
    answer_type: AnswerType
    reward_amount: Amount
    bond_amount: Amount
    expiry_timestamp: PosixTime
    challenge_period: PosixTimeDiff
    data_source: OptionalText
    metadata: OptionalText
    created_at: PosixTime
    phase: RequestPhase

    @property
    def status(self) -> RequestStatus:
        return _PHASE_STATUS[type(self.phase)]

    @property
    def creator(self) -> VerificationKeyHash:
        return VerificationKeyHash(self.creator_pkh)

    @property
    def question_text(self) -> str:
        return decode_text(self.question, "question")

    @property
    def data_source_text(self) -> str | None:
        return from_optional_text(self.data_source)

    @property
    def metadata_text(self) -> str | None:
        return from_optional_text(self.metadata)

    @property
    def proposal(self) -> Proposal | None:
        if isinstance(self.phase, (Proposed, Disputed, Resolved)):
            return self.phase.proposal
        return None

    @property
    def dispute(self) -> Dispute | None:
        if isinstance(self.phase, Disputed):
            return self.phase.dispute
        if isinstance(self.phase, Resolved) and isinstance(self.phase.dispute, Dispute):
            return self.phase.dispute
        return None

    @property
    def proposer(self) -> VerificationKeyHash | None:
        return self.proposal.proposer if self.proposal else None

    @property
    def proposal_time(self) -> PosixTime | None:
        return self.proposal.proposal_time if self.proposal else None

    @property
    def answer(self) -> str | None:
        return self.proposal.answer_text if self.proposal else None

    @property
    def disputer(self) -> VerificationKeyHash | None:
        return self.dispute.disputer if self.dispute else None

    @property
    def dispute_time(self) -> PosixTime | None:
        return self.dispute.dispute_time if self.dispute else None

    @property
    def resolved_at(self) -> PosixTime | None:
        if isinstance(self.phase, Resolved):
            return self.phase.resolved_at
        return None

    @property
    def challenge_ends_at(self) -> PosixTime | None:
        """Last moment at which the proposal can still be disputed."""
        if self.proposal is None:
            return None
        return self.proposal.proposal_time + self.challenge_period

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


@dataclass
class OracleStateDatum(PlutusData):
    """Registry singleton: resolver authority and request bookkeeping"""

    CONSTR_ID = 0
    admin_pkh: PubKeyHash
    request_count: int = 0
    total_volume: Amount = 0

    @property
    def admin(self) -> VerificationKeyHash:
        return VerificationKeyHash(self.admin_pkh)

    @property
    def next_request_id(self) -> RequestId:
        return checked_add(self.request_count, 1)

    def register_request(self, reward_amount: Amount) -> RequestId:
        """Assign the next request id and account for the posted reward.

        Both counters are computed before either is written, so an overflow
        leaves the registry untouched.
        """
        request_id = self.next_request_id
        total_volume = checked_add(self.total_volume, reward_amount)
        self.request_count = request_id
        self.total_volume = total_volume
        return request_id
