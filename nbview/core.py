"""Core types used across all modules."""

from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ErrorKind(StrEnum):
    """Document-level failure kinds. Both abort a render before any line is produced."""

    IO_UNAVAILABLE = "IOUnavailable"
    MALFORMED_DOCUMENT = "MalformedDocument"


class Diag(BaseModel):
    """A structured diagnostic message."""

    severity: Severity
    code: str
    message: str
    hint: str | None = None


# Pydantic generic models must subclass Generic[T], not use PEP 695 syntax.
class Result(BaseModel, Generic[T]):  # noqa: UP046
    """Result container that pairs output with diagnostics.

    Loading functions never throw for unreadable or malformed input.
    They return Result with diagnostics instead.
    """

    data: T | None = None
    diagnostics: list[Diag] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)

    @property
    def ok(self) -> bool:
        return not self.has_errors

    @property
    def first_error(self) -> Diag | None:
        return next((d for d in self.diagnostics if d.severity == Severity.ERROR), None)

    def error(self, code: str, message: str, *, hint: str | None = None) -> None:
        self.diagnostics.append(Diag(severity=Severity.ERROR, code=code, message=message, hint=hint))

    def fail(self, kind: ErrorKind, detail: str, *, hint: str | None = None) -> None:
        """Record a document-level failure. The message starts with the kind verbatim."""
        self.data = None
        self.error(kind.value, f"{kind.value}: {detail}", hint=hint)
