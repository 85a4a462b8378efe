"""System log models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class LogSeverity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class SystemLogEntry:
    """A user-facing message emitted by an admin workflow."""

    message: str
    severity: LogSeverity
    timestamp: datetime
