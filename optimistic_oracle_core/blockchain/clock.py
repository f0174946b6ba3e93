"""Clock collaborators read once per program operation."""

import time
from typing import Protocol

from optimistic_oracle_core.models.base import PosixTime


class Clock(Protocol):
    def now(self) -> PosixTime: ...


class SystemClock:
    """Wall clock in whole POSIX seconds."""

    def now(self) -> PosixTime:
        return int(time.time())


class ManualClock:
    """Clock that only moves when told to, for simulations and tests."""

    def __init__(self, current_time: PosixTime) -> None:
        self.current_time = current_time

    def now(self) -> PosixTime:
        return self.current_time

    def set(self, current_time: PosixTime) -> None:
        self.current_time = current_time

    def advance(self, seconds: int) -> PosixTime:
        self.current_time += seconds
        return self.current_time
