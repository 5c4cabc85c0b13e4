"""
Enumeration types for Name Bender.

These enums provide type-safe constants for check statuses, error codes,
and configuration options throughout the package.
"""

from enum import Enum


class AvailabilityStatus(Enum):
    """
    Status of a domain or trademark check.

    Legal transitions are UNKNOWN -> CHECKING -> AVAILABLE | TAKEN. A TLD that
    is dropped from the selection and later re-selected starts over at UNKNOWN.
    """

    UNKNOWN = "unknown"
    CHECKING = "checking"
    AVAILABLE = "available"
    TAKEN = "taken"

    @property
    def is_terminal(self) -> bool:
        return self in (AvailabilityStatus.AVAILABLE, AvailabilityStatus.TAKEN)


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class DNSErrorCode(Enum):
    """Error codes for DNS-over-HTTPS lookups."""

    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"
    PARSE_ERROR = "parse_error"
    HTTP_ERROR = "http_error"


class TrademarkErrorCode(Enum):
    """Error codes for trademark registry lookups."""

    NOT_CONFIGURED = "not_configured"
    NETWORK_ERROR = "network_error"
    HTTP_ERROR = "http_error"
    PARSE_ERROR = "parse_error"


class GenerationErrorCode(Enum):
    """Error codes for name generation failures."""

    NOT_CONFIGURED = "not_configured"
    REQUEST_FAILED = "request_failed"
    PARSE_ERROR = "parse_error"
