"""Base types used in the models."""

from pycardano import ConstrainedBytes
from pydantic import BaseModel, Field

PosixTime = int
PosixTimeDiff = int
Amount = int
RequestId = int
PubKeyHash = bytes

U64_MAX: int = (1 << 64) - 1


class Ed25519Signature(ConstrainedBytes):
    """Ed25519 signature constrained to 64 bytes."""

    MAX_SIZE = MIN_SIZE = 64

    @classmethod
    def from_hex(cls, hex_str: str) -> "Ed25519Signature":
        """Create signature from hex string."""
        try:
            return cls.from_primitive(hex_str)
        except (ValueError, AssertionError, TypeError) as err:
            raise ValueError("Invalid Ed25519 signature format") from err


class RequestStats(BaseModel):
    """Aggregate view over every request known to the program."""

    total: int = Field(0, description="Number of requests ever created")
    active: int = Field(0, description="Requests waiting for a proposal")
    proposed: int = Field(0, description="Requests inside the challenge window")
    disputed: int = Field(0, description="Requests waiting for the resolver")
    resolved: int = Field(0, description="Settled requests")
    cancelled: int = Field(0, description="Requests cancelled by their creator")
    total_volume: Amount = Field(0, description="Cumulative posted reward")
    total_locked: Amount = Field(0, description="Funds currently held in escrow")


class ProposerStats(BaseModel):
    """Track record of a single proposer."""

    proposer: str = Field(..., description="Proposer verification key hash (hex)")
    total_proposals: int = Field(0, description="Answers proposed")
    successful_proposals: int = Field(0, description="Proposals settled in favour")
    total_earnings: Amount = Field(0, description="Reward and bonds received")
    success_rate: float = Field(0.0, description="successful / total proposals")
