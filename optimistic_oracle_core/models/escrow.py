"""Escrow pool identities for oracle requests"""

from dataclasses import dataclass
from enum import Enum

from nacl.encoding import RawEncoder
from nacl.hash import blake2b
from pycardano import Address, Network, ScriptHash
from pycardano.hash import SCRIPT_HASH_SIZE

from optimistic_oracle_core.models.base import RequestId


class PoolRole(str, Enum):
    """Role of an escrow pool within a request"""

    REWARD = "reward"  # creator's reward, paid to the winner or refunded
    PROPOSAL_BOND = "proposal_bond"  # proposer's bond
    DISPUTE_BOND = "dispute_bond"  # disputer's bond

    @property
    def seed(self) -> bytes:
        return _POOL_SEEDS[self]


_POOL_SEEDS: dict[PoolRole, bytes] = {
    PoolRole.REWARD: b"request_escrow",
    PoolRole.PROPOSAL_BOND: b"proposal_escrow",
    PoolRole.DISPUTE_BOND: b"dispute_escrow",
}


@dataclass(frozen=True)
class EscrowPoolKey:
    """Balance holder scoped to one request and one role.

    The key is the ledger account. Its address is a deterministic
    script-hash-sized digest of the role seed and the little-endian request
    id, so off-ledger clients can locate a request's pools without a lookup.
    """

    request_id: RequestId
    role: PoolRole

    @property
    def script_hash(self) -> ScriptHash:
        seed = self.role.seed + self.request_id.to_bytes(8, "little")
        return ScriptHash(blake2b(seed, SCRIPT_HASH_SIZE, encoder=RawEncoder))

    def address(self, network: Network = Network.TESTNET) -> Address:
        return Address(payment_part=self.script_hash, network=network)

    @property
    def label(self) -> str:
        return f"escrow:{self.request_id}:{self.role.value}"

    @classmethod
    def from_label(cls, label: str) -> "EscrowPoolKey":
        prefix, request_id, role = label.split(":")
        if prefix != "escrow":
            raise ValueError(f"Not an escrow label: {label}")
        return cls(int(request_id), PoolRole(role))

    def __str__(self) -> str:
        return self.label


def request_pools(request_id: RequestId) -> dict[PoolRole, EscrowPoolKey]:
    """All escrow pools belonging to a request, keyed by role."""
    return {role: EscrowPoolKey(request_id, role) for role in PoolRole}
