"""System log for user-facing admin messages.

Workflows report progress and failures here with a severity of
``info``, ``success`` or ``error``. Entries are kept in a bounded history for
the admin console and forwarded to the standard logging module.
"""

import logging
from collections import deque
from datetime import datetime, timezone
from typing import Optional, Union

from src.models import LogSeverity, SystemLogEntry

logger = logging.getLogger(__name__)

_LEVELS = {
    LogSeverity.INFO: logging.INFO,
    LogSeverity.SUCCESS: logging.INFO,
    LogSeverity.ERROR: logging.ERROR,
}


class SystemLogService:
    """Bounded, in-process history of system log entries."""

    def __init__(self, capacity: int = 100):
        self._entries: deque[SystemLogEntry] = deque(maxlen=capacity)

    def log(self, message: str, severity: Union[LogSeverity, str] = LogSeverity.INFO) -> None:
        """Record a message. Never raises for a bad severity; unknown values are logged as info."""
        try:
            severity = LogSeverity(severity)
        except ValueError:
            logger.warning(f"Unknown system log severity '{severity}', using info")
            severity = LogSeverity.INFO

        entry = SystemLogEntry(
            message=message,
            severity=severity,
            timestamp=datetime.now(timezone.utc),
        )
        self._entries.append(entry)
        logger.log(_LEVELS[severity], f"[{severity.value}] {message}")

    def entries(self, severity: Optional[LogSeverity] = None) -> list[SystemLogEntry]:
        """Return recorded entries, oldest first, optionally filtered by severity."""
        if severity is None:
            return list(self._entries)
        return [entry for entry in self._entries if entry.severity == severity]

    def clear(self) -> None:
        self._entries.clear()
