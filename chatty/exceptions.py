"""Closed error taxonomy for the chat relay."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from chatty.models import ErrorResponse


class ErrorKind(str, Enum):
    """Every way a chat request can fail."""

    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    UPSTREAM = "upstream"
    UNEXPECTED = "unexpected"


_MESSAGES = {
    ErrorKind.VALIDATION: "Prompt is required",
    ErrorKind.CONFIGURATION: "API key not configured on server",
    ErrorKind.UNEXPECTED: "Internal server error",
}

_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.UNEXPECTED: 500,
}


@dataclass(eq=False)
class ChatError(Exception):
    """Terminal failure of a single chat request.

    ``status_code`` is only meaningful for ``ErrorKind.UPSTREAM`` and carries
    the status reported by the completion service.
    """

    kind: ErrorKind
    details: str | None = None
    status_code: int | None = None

    def __post_init__(self) -> None:
        if self.kind is ErrorKind.UPSTREAM and self.status_code is None:
            raise ValueError("Upstream errors require a status code")

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message

    @classmethod
    def upstream(cls, status_code: int, details: str | None) -> ChatError:
        return cls(ErrorKind.UPSTREAM, details=details, status_code=status_code)

    @classmethod
    def unexpected(cls, details: str | None) -> ChatError:
        return cls(ErrorKind.UNEXPECTED, details=details)

    @property
    def message(self) -> str:
        if self.kind is ErrorKind.UPSTREAM:
            return f"OpenAI API Error: {self.status_code}"
        return _MESSAGES[self.kind]

    def http_status(self) -> int:
        if self.kind is ErrorKind.UPSTREAM:
            return self.status_code  # type: ignore[return-value]
        return _STATUS_CODES[self.kind]

    def to_response(self) -> ErrorResponse:
        details = self.details
        if self.kind in (ErrorKind.VALIDATION, ErrorKind.CONFIGURATION):
            details = None
        return ErrorResponse(error=self.message, details=details)
