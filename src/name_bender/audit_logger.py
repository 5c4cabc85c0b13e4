"""
Audit Logger module for Name Bender.

Structured logging for the session, the oracle clients and the CLI. Every
entry is written as a JSON line, a human-readable line, or both; entries
below the configured level are dropped and credentials are masked before
anything leaves the process.
"""

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

from name_bender.enums import LogLevel


LEVEL_ORDER = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARN: 2,
    LogLevel.ERROR: 3,
}

OUTPUT_FORMATS = ("json", "text", "both")

# Substrings of data keys whose values never reach the output
SENSITIVE_KEYS = frozenset({
    "token", "secret", "password", "api_key", "apikey",
    "authorization", "credential", "bearer",
})

MASK_VALUE = "***MASKED***"


def is_sensitive_key(key: Any) -> bool:
    key_lower = str(key).lower()
    return any(pattern in key_lower for pattern in SENSITIVE_KEYS)


def mask_sensitive_data(value: Any) -> Any:
    """
    Return a copy of value with every credential-like entry masked.

    Dictionaries are walked recursively, including dictionaries inside
    lists; other values are returned unchanged.
    """
    if isinstance(value, dict):
        return {
            key: MASK_VALUE if is_sensitive_key(key) else mask_sensitive_data(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [mask_sensitive_data(item) for item in value]
    return value


@dataclass
class LogEntry:
    """A single log entry; data is already masked."""

    timestamp: str
    level: LogLevel
    component: str
    message: str
    data: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "component": self.component,
            "message": self.message,
            "data": self.data,
        }

    def to_text(self) -> str:
        # [TIMESTAMP] LEVEL [COMPONENT] MESSAGE {data}
        line = f"[{self.timestamp}] {self.level.value.upper()} [{self.component}] {self.message}"
        if self.data:
            line += " " + json.dumps(self.data, ensure_ascii=False, default=str)
        return line


class AuditLogger:
    """
    Structured logger handed to components through their constructors.

    Components log only when a logger was given, so library use stays
    silent unless the caller opts in.
    """

    MASK_VALUE = MASK_VALUE

    def __init__(
        self,
        output_format: str = "text",
        output_stream: Optional[TextIO] = None,
        min_level: LogLevel = LogLevel.DEBUG,
    ):
        """
        Initialize the audit logger.

        Args:
            output_format: Output format - 'json', 'text', or 'both'
            output_stream: Output stream for log entries (defaults to sys.stderr)
            min_level: Entries below this level are discarded

        Raises:
            ValueError: If output_format is not one of OUTPUT_FORMATS
        """
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Invalid output_format: {output_format}")

        self._output_format = output_format
        self._output_stream = output_stream or sys.stderr
        self._min_level = min_level
        self._entries: list[LogEntry] = []

    @classmethod
    def from_level_name(
        cls,
        level: str,
        output_format: str = "text",
        output_stream: Optional[TextIO] = None,
    ) -> "AuditLogger":
        """Build a logger from a configured level name such as 'info'."""
        try:
            min_level = LogLevel(level.lower())
        except ValueError:
            min_level = LogLevel.INFO
        return cls(output_format, output_stream, min_level)

    @property
    def entries(self) -> list[LogEntry]:
        """Entries written so far."""
        return self._entries.copy()

    def log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Log an entry in the configured format(s).

        Args:
            level: Log severity level
            component: Component name generating the log
            message: Human-readable log message
            data: Optional additional data to include

        Returns:
            The created LogEntry, or None if it was below the minimum level
        """
        if LEVEL_ORDER[level] < LEVEL_ORDER[self._min_level]:
            return None

        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            level=level,
            component=component,
            message=message,
            data=mask_sensitive_data(data or {}),
        )

        self._entries.append(entry)
        self._write(entry)

        return entry

    def log_error(
        self,
        component: str,
        message: str,
        error: Optional[Exception] = None,
        additional_data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """Log at ERROR level with the exception type and message attached."""
        data = dict(additional_data or {})

        if error is not None:
            data["error_message"] = str(error)
            data["error_type"] = type(error).__name__

        return self.log(LogLevel.ERROR, component, message, data)

    def _write(self, entry: LogEntry) -> None:
        if self._output_format in ("json", "both"):
            line = json.dumps(entry.to_dict(), ensure_ascii=False, default=str)
            self._output_stream.write(line + "\n")

        if self._output_format in ("text", "both"):
            self._output_stream.write(entry.to_text() + "\n")

        self._output_stream.flush()
