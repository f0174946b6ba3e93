"""Tests for datums, escrow identities and events."""

import pytest
from pycardano import Address, Network, PaymentSigningKey, ScriptHash

from optimistic_oracle_core.constants.status import RequestStatus
from optimistic_oracle_core.models.base import U64_MAX
from optimistic_oracle_core.models.escrow import EscrowPoolKey, PoolRole, request_pools
from optimistic_oracle_core.models.events import (
    AnswerProposed,
    DisputeResolved,
    OracleEvent,
    RequestCreated,
)
from optimistic_oracle_core.models.oracle_datums import (
    Cancelled,
    Created,
    Dispute,
    Disputed,
    MultipleChoice,
    NoDatum,
    Numeric,
    OracleStateDatum,
    Proposal,
    Proposed,
    RequestDatum,
    Resolved,
    YesNo,
    answer_type_from_name,
    answer_type_name,
    decode_text,
    encode_text,
    to_optional_text,
)
from optimistic_oracle_core.oracle.exceptions import ArithmeticOverflowError, InvalidText


def _vkh():
    return PaymentSigningKey.generate().to_verification_key().hash()


def _request(phase, **overrides) -> RequestDatum:
    fields = {
        "request_id": 1,
        "creator_pkh": _vkh().payload,
        "question": encode_text("Will BTC close above 100k?"),
        "answer_type": YesNo(),
        "reward_amount": 1000,
        "bond_amount": 200,
        "expiry_timestamp": 2_000,
        "challenge_period": 3600,
        "data_source": to_optional_text("https://example.org/btc"),
        "metadata": to_optional_text(None),
        "created_at": 1_000,
        "phase": phase,
    }
    fields.update(overrides)
    return RequestDatum(**fields)


class TestRequestDatum:
    def setup_method(self) -> None:
        self.proposer = _vkh()
        self.disputer = _vkh()
        self.proposal = Proposal(
            proposer_pkh=self.proposer.payload,
            proposal_time=2_500,
            answer=encode_text("YES"),
        )
        self.dispute = Dispute(disputer_pkh=self.disputer.payload, dispute_time=2_600)

    def test_created_has_no_proposal(self) -> None:
        request = _request(Created())

        assert request.status == RequestStatus.CREATED
        assert request.proposer is None
        assert request.disputer is None
        assert request.challenge_ends_at is None
        assert request.data_source_text == "https://example.org/btc"
        assert request.metadata_text is None

    def test_proposed_exposes_proposal(self) -> None:
        request = _request(Proposed(proposal=self.proposal))

        assert request.status == RequestStatus.PROPOSED
        assert request.proposer == self.proposer
        assert request.answer == "YES"
        assert request.challenge_ends_at == 2_500 + 3600
        assert not request.is_terminal

    def test_resolved_after_dispute_keeps_both_principals(self) -> None:
        request = _request(
            Resolved(
                proposal=self.proposal,
                dispute=self.dispute,
                resolved_at=3_000,
                winner_pkh=self.proposer.payload,
                payout=1400,
            )
        )

        assert request.status == RequestStatus.RESOLVED
        assert request.is_terminal
        assert request.disputer == self.disputer
        assert request.resolved_at == 3_000

    def test_undisputed_resolution_has_no_disputer(self) -> None:
        request = _request(
            Resolved(
                proposal=self.proposal,
                dispute=NoDatum(),
                resolved_at=9_000,
                winner_pkh=self.proposer.payload,
                payout=1200,
            )
        )

        assert request.dispute is None
        assert request.dispute_time is None

    def test_cbor_round_trip_preserves_phase(self) -> None:
        request = _request(Disputed(proposal=self.proposal, dispute=self.dispute))

        restored = RequestDatum.from_cbor(request.to_cbor())

        assert restored == request
        assert restored.status == RequestStatus.DISPUTED
        assert restored.question_text == "Will BTC close above 100k?"

    def test_cancelled_is_terminal(self) -> None:
        request = _request(Cancelled(cancelled_at=1_500))
        assert request.status == RequestStatus.CANCELLED
        assert request.is_terminal

    def test_principals_are_exposed_as_key_hashes(self) -> None:
        request = _request(
            Resolved(
                proposal=self.proposal,
                dispute=self.dispute,
                resolved_at=3_000,
                winner_pkh=self.disputer.payload,
                payout=1400,
            )
        )

        assert request.proposer == self.proposer
        assert request.phase.winner == self.disputer
        assert request.creator.payload == request.creator_pkh

    def test_long_texts_survive_cbor_round_trip(self) -> None:
        question = "Which team wins the final? " * 18
        request = _request(
            Created(),
            question=encode_text(question),
            metadata=to_optional_text("m" * 300),
        )

        restored = RequestDatum.from_cbor(request.to_cbor_hex())

        assert len(question.encode("utf-8")) > 64
        assert restored.question_text == question
        assert restored.metadata_text == "m" * 300

    def test_invalid_utf8_text_is_rejected(self) -> None:
        with pytest.raises(InvalidText):
            decode_text(b"\xff\xfe", "question")


class TestOracleStateDatum:
    def test_register_request_increments(self) -> None:
        registry = OracleStateDatum(admin_pkh=_vkh().payload)

        assert registry.register_request(1000) == 1
        assert registry.register_request(500) == 2
        assert registry.request_count == 2
        assert registry.total_volume == 1500

    def test_volume_overflow_leaves_registry_unchanged(self) -> None:
        registry = OracleStateDatum(
            admin_pkh=_vkh().payload, request_count=4, total_volume=U64_MAX
        )

        with pytest.raises(ArithmeticOverflowError):
            registry.register_request(1)

        assert registry.request_count == 4
        assert registry.total_volume == U64_MAX


class TestAnswerTypes:
    @pytest.mark.parametrize(
        "name, cls",
        [("yes_no", YesNo), ("multiple-choice", MultipleChoice), ("NUMERIC", Numeric)],
    )
    def test_from_name(self, name: str, cls: type) -> None:
        answer_type = answer_type_from_name(name)
        assert isinstance(answer_type, cls)
        assert answer_type_from_name(answer_type_name(answer_type)) == answer_type

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError):
            answer_type_from_name("scalar")


class TestEscrowPoolKey:
    def test_addresses_are_distinct_per_role_and_request(self) -> None:
        hashes = {
            pool.script_hash
            for request_id in (1, 2)
            for pool in request_pools(request_id).values()
        }
        assert len(hashes) == 6

    def test_address_is_deterministic(self) -> None:
        pool = EscrowPoolKey(7, PoolRole.PROPOSAL_BOND)
        again = EscrowPoolKey(7, PoolRole.PROPOSAL_BOND)

        assert isinstance(pool.script_hash, ScriptHash)
        assert pool.address() == again.address()
        assert pool.address(Network.MAINNET) == Address(
            payment_part=pool.script_hash, network=Network.MAINNET
        )

    def test_request_pools_cover_every_role(self) -> None:
        pools = request_pools(5)
        assert set(pools) == set(PoolRole)
        assert all(pool.request_id == 5 for pool in pools.values())


class TestEvents:
    def test_to_dict_uses_hex_principals(self) -> None:
        proposer = _vkh()
        event = AnswerProposed(
            request_id=3, proposer=proposer, answer="42.5", proposal_time=100
        )

        data = event.to_dict()

        assert data["event"] == "AnswerProposed"
        assert data["proposer"] == proposer.payload.hex()
        assert OracleEvent.from_dict(data) == event

    def test_from_dict_dispatches_on_name(self) -> None:
        winner, loser = _vkh(), _vkh()
        event = DisputeResolved(
            request_id=1, winner=winner, loser=loser, proposer_wins=False
        )

        restored = OracleEvent.from_dict(event.to_dict())

        assert isinstance(restored, DisputeResolved)
        assert restored.loser == loser

    def test_created_event_fields(self) -> None:
        event = RequestCreated(
            request_id=1,
            creator=_vkh(),
            question="Q?",
            reward_amount=10,
            bond_amount=2,
            expiry_timestamp=50,
        )
        assert set(event.to_dict()) == {
            "event",
            "request_id",
            "creator",
            "question",
            "reward_amount",
            "bond_amount",
            "expiry_timestamp",
        }
