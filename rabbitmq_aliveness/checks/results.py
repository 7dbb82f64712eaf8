from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Status(IntEnum):
    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


@dataclass
class CheckResult:
    status: Status
    message: str
    latency_ms: int | None = None
    status_code: int | None = None

    @property
    def exit_code(self) -> int:
        return int(self.status)
