"""
Diagnostic model — messages reported back to whoever invoked a round.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class DiagnosticKind(str, Enum):
    NOTE = "note"
    WARNING = "warning"
    ERROR = "error"


class Diagnostic(BaseModel):
    """A single message, optionally attributed to a program element."""

    kind: DiagnosticKind
    message: str
    element: str | None = None   # qualified name of the originating element
    source_file: str | None = None
    line: int | None = None

    @property
    def is_error(self) -> bool:
        return self.kind is DiagnosticKind.ERROR

    def __str__(self) -> str:
        where = ""
        if self.source_file:
            where = f"{self.source_file}:{self.line}: " if self.line else f"{self.source_file}: "
        elif self.element:
            where = f"{self.element}: "
        return f"{where}{self.kind.value}: {self.message}"
