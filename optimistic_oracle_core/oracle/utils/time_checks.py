"""Time-related validation utilities for request transitions."""

import logging

from optimistic_oracle_core.models.oracle_datums import (
    MAX_CHALLENGE_PERIOD,
    MIN_CHALLENGE_PERIOD,
)
from optimistic_oracle_core.oracle.exceptions import (
    ChallengePeriodExpired,
    ChallengePeriodNotExpired,
    ChallengePeriodTooLong,
    ChallengePeriodTooShort,
    InvalidExpiry,
    RequestNotExpired,
)

logger = logging.getLogger(__name__)


def challenge_deadline(proposal_time: int, challenge_period: int) -> int:
    """Last timestamp at which a proposal may still be disputed."""
    return proposal_time + challenge_period


def is_past_expiry(expiry_timestamp: int, current_time: int) -> bool:
    """Answers may be proposed at and after the expiry timestamp."""
    return current_time >= expiry_timestamp


def is_within_challenge_period(
    proposal_time: int, challenge_period: int, current_time: int
) -> bool:
    """Check if a dispute can still be raised.

    This and has_challenge_period_elapsed are complementary: for any
    current_time exactly one of them holds.
    """
    return current_time <= challenge_deadline(proposal_time, challenge_period)


def has_challenge_period_elapsed(
    proposal_time: int, challenge_period: int, current_time: int
) -> bool:
    return not is_within_challenge_period(proposal_time, challenge_period, current_time)


def validate_expiry(expiry_timestamp: int, current_time: int) -> None:
    if expiry_timestamp <= current_time:
        raise InvalidExpiry(
            f"Expiry {expiry_timestamp} must be after current time {current_time}"
        )


def validate_challenge_period(challenge_period: int) -> None:
    if challenge_period < MIN_CHALLENGE_PERIOD:
        raise ChallengePeriodTooShort(
            f"Challenge period {challenge_period}s is below {MIN_CHALLENGE_PERIOD}s"
        )
    if challenge_period > MAX_CHALLENGE_PERIOD:
        raise ChallengePeriodTooLong(
            f"Challenge period {challenge_period}s is above {MAX_CHALLENGE_PERIOD}s"
        )


def require_expired(expiry_timestamp: int, current_time: int) -> None:
    if not is_past_expiry(expiry_timestamp, current_time):
        raise RequestNotExpired(
            f"Request expires at {expiry_timestamp}, current time {current_time}"
        )


def require_challenge_open(
    proposal_time: int, challenge_period: int, current_time: int
) -> None:
    if not is_within_challenge_period(proposal_time, challenge_period, current_time):
        logger.debug(
            "Dispute rejected: window closed at %d (now %d)",
            challenge_deadline(proposal_time, challenge_period),
            current_time,
        )
        raise ChallengePeriodExpired(
            f"Challenge period ended at "
            f"{challenge_deadline(proposal_time, challenge_period)}"
        )


def require_challenge_elapsed(
    proposal_time: int, challenge_period: int, current_time: int
) -> None:
    if not has_challenge_period_elapsed(proposal_time, challenge_period, current_time):
        raise ChallengePeriodNotExpired(
            f"Challenge period runs until "
            f"{challenge_deadline(proposal_time, challenge_period)}"
        )
