"""Instructions accepted by the optimistic oracle program"""

import hashlib
from dataclasses import dataclass
from typing import Union

from pycardano import PlutusData, VerificationKeyHash
from pycardano.serialization import ByteString

from optimistic_oracle_core.models.base import (
    Amount,
    PosixTime,
    PosixTimeDiff,
    PubKeyHash,
)
from optimistic_oracle_core.models.oracle_datums import AnswerType, OptionalText


@dataclass
class Initialize(PlutusData):
    """One time setup of the registry with its resolver authority"""

    CONSTR_ID = 0
    admin_pkh: PubKeyHash

    @property
    def admin(self) -> VerificationKeyHash:
        return VerificationKeyHash(self.admin_pkh)


@dataclass
class CreateRequest(PlutusData):
    """Creator posts a question and escrows the reward"""

    CONSTR_ID = 1
    question: ByteString
    answer_type: AnswerType
    reward_amount: Amount
    bond_amount: Amount
    expiry_timestamp: PosixTime
    challenge_period: PosixTimeDiff
    data_source: OptionalText
    metadata: OptionalText


@dataclass
class ProposeAnswer(PlutusData):
    """Proposer answers an expired request under bond"""

    CONSTR_ID = 2
    request_id: int
    answer: ByteString


@dataclass
class DisputeAnswer(PlutusData):
    """Disputer challenges a proposal under bond"""

    CONSTR_ID = 3
    request_id: int
    counter_answer: OptionalText


@dataclass
class ResolveUndisputed(PlutusData):
    """Anyone settles a proposal whose challenge window elapsed"""

    CONSTR_ID = 4
    request_id: int


@dataclass
class ResolveDisputedViaVote(PlutusData):
    """Admin settles a disputed request"""

    CONSTR_ID = 5
    request_id: int
    proposer_wins: int  # 1 = proposer wins, 0 = disputer wins

    def __post_init__(self) -> None:
        if self.proposer_wins not in (0, 1):
            raise ValueError("proposer_wins must be 0 or 1")


@dataclass
class CancelRequest(PlutusData):
    """Creator withdraws a request that has no proposal"""

    CONSTR_ID = 6
    request_id: int


# Type alias for OracleRedeemer variants
OracleRedeemer = Union[  # noqa
    Initialize,
    CreateRequest,
    ProposeAnswer,
    DisputeAnswer,
    ResolveUndisputed,
    ResolveDisputedViaVote,
    CancelRequest,
]


@dataclass
class Instruction(PlutusData):
    """Signed envelope around a single redeemer.

    The nonce makes otherwise identical instructions produce distinct
    digests; the program refuses a digest it has already executed.
    """

    CONSTR_ID = 0
    action: OracleRedeemer
    nonce: int

    def get_message_digest(self) -> bytes:
        """Get message digest for signing."""
        return hashlib.sha256(self.to_cbor()).digest()
