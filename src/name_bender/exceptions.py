"""
Exception classes for Name Bender.

All exceptions inherit from NameBenderError and carry a code, a
human-readable message and optional details.
"""

from typing import Optional


class NameBenderError(Exception):
    """Base exception for all Name Bender errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(NameBenderError):
    """Raised when user input (a TLD token, a selection) is rejected."""

    pass


class GenerationError(NameBenderError):
    """Raised when the name generation backend fails or returns garbage."""

    pass


class NetworkError(NameBenderError):
    """Raised when an oracle request cannot be completed."""

    pass


class ProtocolError(NameBenderError):
    """Raised when an oracle answers with something we cannot interpret."""

    pass


class PersistenceError(NameBenderError):
    """Raised when the preference file cannot be read, parsed or written."""

    pass
