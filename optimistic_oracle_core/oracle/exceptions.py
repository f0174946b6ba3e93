"""Custom exceptions for oracle operations and validation."""


class OracleError(Exception):
    """Base exception for all oracle-related errors."""

    pass


# Input Validation Errors
class ValidationError(OracleError):
    """Base exception for malformed instruction input."""

    pass


class QuestionTooLong(ValidationError):
    """Raised when the question exceeds the maximum length."""

    pass


class AnswerTooLong(ValidationError):
    """Raised when the proposed answer exceeds the maximum length."""

    pass


class InvalidReward(ValidationError):
    """Raised when the reward amount is not a positive u64."""

    pass


class InvalidBond(ValidationError):
    """Raised when the bond amount is not a positive u64."""

    pass


class InvalidExpiry(ValidationError):
    """Raised when the expiry timestamp is not in the future."""

    pass


class ChallengePeriodTooShort(ValidationError):
    """Raised when the challenge period is below the minimum."""

    pass


class ChallengePeriodTooLong(ValidationError):
    """Raised when the challenge period is above the maximum."""

    pass


class InvalidAnswer(ValidationError):
    """Raised when the answer does not match the request answer type."""

    pass


class InvalidText(ValidationError):
    """Raised when instruction text is not valid UTF-8."""

    pass


# State Validation Errors
class StateValidationError(OracleError):
    """Raised when a transition is attempted from the wrong state."""

    pass


class InvalidStatus(StateValidationError):
    """Raised when the request status does not allow the transition."""

    pass


class CannotCancel(InvalidStatus):
    """Raised when cancelling a request that already has a proposal."""

    pass


# Time Validation Errors
class TimeValidationError(OracleError):
    """Raised when a timing window is violated."""

    pass


class RequestNotExpired(TimeValidationError):
    """Raised when proposing before the request expiry."""

    pass


class ChallengePeriodExpired(TimeValidationError):
    """Raised when disputing after the challenge period ended."""

    pass


class ChallengePeriodNotExpired(TimeValidationError):
    """Raised when resolving while the challenge period is still open."""

    pass


# Authorization Errors
class AuthorizationError(OracleError):
    """Base exception for caller capability checks."""

    pass


class Unauthorized(AuthorizationError):
    """Raised when the caller is not the required principal."""

    pass


class SignatureError(AuthorizationError):
    """Raised when an instruction signature cannot be verified."""

    pass


# Integrity Errors
class IntegrityError(OracleError):
    """Raised when a stored request breaks a state invariant."""

    pass


class NoProposal(IntegrityError):
    """Raised when a proposal is required but absent."""

    pass


class NoProposer(IntegrityError):
    """Raised when a proposer is required but absent."""

    pass


class NoDisputer(IntegrityError):
    """Raised when a disputer is required but absent."""

    pass


# Accounting Errors
class AccountingError(OracleError):
    """Base exception for balance accounting failures."""

    pass


class InsufficientFundsError(AccountingError):
    """Raised when a debit would take a balance below zero."""

    pass


class ArithmeticOverflowError(AccountingError):
    """Raised when checked u64 arithmetic overflows."""

    pass


class ResidualBalanceError(AccountingError):
    """Raised when an escrow pool is not drained by a terminal transition."""

    pass


# Registry Errors
class RegistryError(OracleError):
    """Base exception for registry errors."""

    pass


class AlreadyInitializedError(RegistryError):
    """Raised when the registry is initialized twice."""

    pass


class NotInitializedError(RegistryError):
    """Raised when an operation needs the registry before initialization."""

    pass


class RequestNotFoundError(RegistryError):
    """Raised when no request exists for the given id."""

    pass


# Data Errors
class DataError(OracleError):
    """Base exception for data-related errors."""

    pass


class SerializationError(DataError):
    """Raised when state serialization fails."""

    pass


class DeserializationError(DataError):
    """Raised when state deserialization fails."""

    pass
