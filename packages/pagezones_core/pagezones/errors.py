"""
Error reporting façade.

Internal faults go through ``log_error`` (logged with traceback and kept for
inspection); user-correctable problems go through ``show_user_error`` and are
recorded as ``UserMessage`` entries for the surrounding UI to display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from .utils.enums import Severity

logger = logging.getLogger(__name__)

_SEVERITY_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.SUCCESS: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class UserMessage:
    """A message meant for the person editing the page."""
    message: str
    severity: Severity = Severity.ERROR
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class ErrorRecord:
    """A logged internal fault."""
    message: str
    context: str
    error_type: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "context": self.context,
            "error_type": self.error_type,
            "timestamp": self.timestamp.isoformat(),
        }


class ErrorReporter:
    """Collects internal faults and user-facing messages."""

    def __init__(self, max_records: int = 200):
        self.max_records = max_records
        self.errors: List[ErrorRecord] = []
        self.user_messages: List[UserMessage] = []

    def log_error(self, error: BaseException, context: str,
                  user_message: Optional[str] = None) -> ErrorRecord:
        """
        Log an internal fault.

        Args:
            error: The exception
            context: Where it happened (e.g. ``"ZoneDiscovery.detect_zones"``)
            user_message: Optional message to also show to the user

        Returns:
            The stored record
        """
        record = ErrorRecord(
            message=str(error) or error.__class__.__name__,
            context=context,
            error_type=error.__class__.__name__,
        )
        self._append(self.errors, record)
        logger.error(f"[{context}] {record.message}", exc_info=error)

        if user_message:
            self.show_user_error(user_message, Severity.ERROR)
        return record

    def show_user_error(self, message: str,
                        severity: Union[Severity, str] = Severity.ERROR) -> UserMessage:
        severity = Severity(severity)
        entry = UserMessage(message=message, severity=severity)
        self._append(self.user_messages, entry)
        logger.log(_SEVERITY_LEVELS[severity], message)
        return entry

    def show_error(self, message: str) -> UserMessage:
        return self.show_user_error(message, Severity.ERROR)

    def show_success(self, message: str) -> UserMessage:
        return self.show_user_error(message, Severity.SUCCESS)

    def show_info(self, message: str) -> UserMessage:
        return self.show_user_error(message, Severity.INFO)

    @property
    def last_message(self) -> Optional[UserMessage]:
        return self.user_messages[-1] if self.user_messages else None

    def clear(self) -> None:
        self.errors.clear()
        self.user_messages.clear()

    def _append(self, bucket: list, item: Any) -> None:
        bucket.append(item)
        if len(bucket) > self.max_records:
            del bucket[0]
