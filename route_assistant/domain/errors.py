"""Typed domain errors for the route assistant.

Each failure the dialogue pipeline can surface has its own error type so
callers can tell a rejected request from a collaborator failure.

All errors inherit from AssistantError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class AssistantError(Exception):
    """Base error for the route assistant domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidMessageError(AssistantError):
    """The request was rejected before it became a conversational turn.

    Raised for an empty or whitespace-only message, or a missing
    session identifier.

    Attributes:
        field_name: The request field that failed validation
    """

    field_name: str = ""


@dataclass
class RouteLookupError(AssistantError):
    """The route lookup collaborator failed.

    Attributes:
        origin: Requested origin city
        destination: Requested destination city
    """

    origin: str = ""
    destination: str = ""


@dataclass
class TurnLogError(AssistantError):
    """Appending to or reading from the turn log failed.

    Attributes:
        session_id: Session whose log was being accessed
    """

    session_id: str = ""


@dataclass
class CatalogError(AssistantError):
    """Route catalog loading or data integrity error.

    Attributes:
        file_path: Path to the catalog data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class ConfigurationError(AssistantError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
