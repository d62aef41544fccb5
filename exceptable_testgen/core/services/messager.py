"""
Messager — the per-run diagnostic sink.

Collects diagnostics in report order and mirrors each one to the
module logger, so a CLI run shows them at the configured level.
"""

from __future__ import annotations

import logging

from exceptable_testgen.core.models.diagnostic import Diagnostic, DiagnosticKind
from exceptable_testgen.core.models.element import ProgramElement

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    DiagnosticKind.NOTE: logging.INFO,
    DiagnosticKind.WARNING: logging.WARNING,
    DiagnosticKind.ERROR: logging.ERROR,
}


class Messager:
    """Records NOTE / WARNING / ERROR diagnostics."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def print_message(
        self,
        kind: DiagnosticKind,
        message: str,
        element: ProgramElement | None = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(
            kind=kind,
            message=message,
            element=element.qualified_name if element else None,
            source_file=element.source_file if element else None,
            line=element.line if element else None,
        )
        self.diagnostics.append(diagnostic)
        logger.log(_LOG_LEVELS[kind], "%s", diagnostic)
        return diagnostic

    def note(self, message: str, element: ProgramElement | None = None) -> Diagnostic:
        return self.print_message(DiagnosticKind.NOTE, message, element)

    def warning(self, message: str, element: ProgramElement | None = None) -> Diagnostic:
        return self.print_message(DiagnosticKind.WARNING, message, element)

    def error(self, message: str, element: ProgramElement | None = None) -> Diagnostic:
        return self.print_message(DiagnosticKind.ERROR, message, element)

    def has_errors(self) -> bool:
        return any(d.is_error for d in self.diagnostics)
