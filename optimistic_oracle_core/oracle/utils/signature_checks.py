"""Utilities for signing instructions and authenticating their callers."""

import logging
import secrets
from dataclasses import dataclass
from typing import Any

from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey
from pycardano import (
    ExtendedSigningKey,
    ExtendedVerificationKey,
    PaymentSigningKey,
    VerificationKey,
    VerificationKeyHash,
)
from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

from optimistic_oracle_core.models.base import Ed25519Signature
from optimistic_oracle_core.models.oracle_redeemers import Instruction, OracleRedeemer
from optimistic_oracle_core.oracle.exceptions import SignatureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerifiedCaller:
    """Identity of a caller whose authority has been verified.

    Entry points compare this token against stored principals; they never
    look at keys or signatures themselves.
    """

    vkh: VerificationKeyHash

    def __str__(self) -> str:
        return self.vkh.payload.hex()


class SignedInstruction(BaseModel):
    """Pydantic model for an instruction signed by its caller."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    instruction: Instruction = Field(..., description="Program instruction")
    signature: Ed25519Signature = Field(..., description="ed25519 signature")
    verification_key: VerificationKey = Field(
        ..., description="Caller's verification key"
    )

    @model_validator(mode="before")
    @classmethod
    def deserialize_fields(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Convert serialized data back to objects."""
        if not all(k in data for k in ["instruction", "signature", "verification_key"]):
            raise ValueError(
                "Missing required fields: instruction, signature, and verification_key"
            )

        if isinstance(data["instruction"], str):
            data["instruction"] = Instruction.from_cbor(
                bytes.fromhex(data["instruction"])
            )

        if isinstance(data["signature"], str):
            data["signature"] = Ed25519Signature(bytes.fromhex(data["signature"]))

        if isinstance(data["verification_key"], str):
            data["verification_key"] = VerificationKey.from_cbor(
                bytes.fromhex(data["verification_key"])
            )

        return data

    @model_serializer
    def serialize_model(self) -> dict[str, str]:
        """Serialize to dict with hex strings."""
        return {
            "instruction": self.instruction.to_cbor().hex(),
            "signature": self.signature.payload.hex(),
            "verification_key": self.verification_key.to_cbor().hex(),
        }

    @property
    def digest(self) -> bytes:
        return self.instruction.get_message_digest()


def sign_instruction(
    action: OracleRedeemer,
    signing_key: PaymentSigningKey | ExtendedSigningKey,
    nonce: int | None = None,
) -> SignedInstruction:
    """Wrap an action in an instruction and sign its digest.

    Args:
        action: Redeemer describing the requested transition
        signing_key: Caller's payment signing key
        nonce: Optional explicit nonce, random when omitted

    Returns:
        SignedInstruction ready for submission
    """
    instruction = Instruction(
        action=action, nonce=secrets.randbits(63) if nonce is None else nonce
    )
    signature = signing_key.sign(instruction.get_message_digest())
    return SignedInstruction(
        instruction=instruction,
        signature=Ed25519Signature(signature),
        verification_key=_verification_key(signing_key),
    )


def verify_instruction(signed: SignedInstruction) -> VerifiedCaller:
    """Verify an instruction signature and derive the caller identity.

    Raises:
        SignatureError: If the signature does not match the verification key
    """
    try:
        verify_key = VerifyKey(signed.verification_key.payload[:32])
        verify_key.verify(signed.digest, signed.signature.payload)
    except BadSignatureError as e:
        logger.warning(
            "Rejected instruction with invalid signature from %s",
            signed.verification_key.hash(),
        )
        raise SignatureError("Invalid instruction signature") from e
    except (ValueError, TypeError) as e:
        raise SignatureError(f"Malformed verification key: {e}") from e

    return VerifiedCaller(signed.verification_key.hash())


def caller_from_signing_key(
    signing_key: PaymentSigningKey | ExtendedSigningKey,
) -> VerifiedCaller:
    """Identity a signing key authenticates as, without signing anything."""
    return VerifiedCaller(_verification_key(signing_key).hash())


def _verification_key(
    signing_key: PaymentSigningKey | ExtendedSigningKey,
) -> VerificationKey:
    verification_key = signing_key.to_verification_key()
    if isinstance(verification_key, ExtendedVerificationKey):
        return verification_key.to_non_extended()
    return verification_key
