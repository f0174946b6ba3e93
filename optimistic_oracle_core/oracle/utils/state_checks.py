"""Utilities for validating request state transitions."""

import logging
from collections.abc import Iterable, Mapping

from pycardano import VerificationKeyHash

from optimistic_oracle_core.constants.status import RequestStatus
from optimistic_oracle_core.models.oracle_datums import (
    Dispute,
    Proposal,
    RequestDatum,
)
from optimistic_oracle_core.oracle.exceptions import (
    CannotCancel,
    InvalidStatus,
    NoDisputer,
    NoProposal,
    NoProposer,
    RequestNotFoundError,
    Unauthorized,
)

logger = logging.getLogger(__name__)


def require_status(request: RequestDatum, expected: RequestStatus) -> None:
    """Raise InvalidStatus unless the request is in the expected status."""
    if request.status != expected:
        logger.debug(
            "Request %d is %s, expected %s",
            request.request_id,
            request.status.value,
            expected.value,
        )
        raise InvalidStatus(
            f"Request {request.request_id} is {request.status.value}, "
            f"expected {expected.value}"
        )


def require_cancellable(request: RequestDatum) -> None:
    if request.status != RequestStatus.CREATED:
        raise CannotCancel(
            f"Request {request.request_id} is {request.status.value} and cannot be cancelled"
        )


def require_principal(
    actual: VerificationKeyHash, expected: VerificationKeyHash, what: str
) -> None:
    if actual.payload != expected.payload:
        raise Unauthorized(f"Caller is not the {what}")


def require_proposal(request: RequestDatum) -> Proposal:
    if request.proposal is None:
        raise NoProposal(f"Request {request.request_id} has no proposal")
    return request.proposal


def require_proposer(request: RequestDatum) -> Proposal:
    if request.proposal is None or request.proposer is None:
        raise NoProposer(f"Request {request.request_id} has no proposer")
    return request.proposal


def require_disputer(request: RequestDatum) -> Dispute:
    if request.dispute is None:
        raise NoDisputer(f"Request {request.request_id} has no disputer")
    return request.dispute


def get_request(requests: Mapping[int, RequestDatum], request_id: int) -> RequestDatum:
    try:
        return requests[request_id]
    except KeyError as e:
        raise RequestNotFoundError(f"Request {request_id} not found") from e


def filter_requests_by_status(
    requests: Iterable[RequestDatum], status: RequestStatus | None = None
) -> list[RequestDatum]:
    """Requests in the given status (all when status is None), ordered by id."""
    return sorted(
        (r for r in requests if status is None or r.status == status),
        key=lambda r: r.request_id,
    )
