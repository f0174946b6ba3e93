from enum import Enum


class ProcessStatus(str, Enum):
    """Status of an orchestrated operation"""

    NOT_STARTED = "not_started"
    SIGNING_INSTRUCTION = "signing_instruction"
    INSTRUCTION_SIGNED = "signed"
    SUBMITTING_INSTRUCTION = "submitting_instruction"
    COMPLETED = "completed"
    REJECTED = "rejected"
    FAILED = "failed"


class RequestStatus(str, Enum):
    """Lifecycle status of an oracle request"""

    CREATED = "created"
    PROPOSED = "proposed"
    DISPUTED = "disputed"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (RequestStatus.RESOLVED, RequestStatus.CANCELLED)
