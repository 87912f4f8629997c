"""Diagnostics sinks passed into extraction by its callers."""

from __future__ import annotations

import logging
from collections.abc import Callable

from zip2workspace.models.archive import Diagnostic, Severity

DiagnosticsSink = Callable[[Diagnostic], None]


def emit(sink: DiagnosticsSink | None, severity: Severity, message: str) -> None:
    """Send a diagnostic to ``sink`` if one was supplied."""
    if sink is not None:
        sink(Diagnostic(severity=severity, message=message))


class DiagnosticsCollector:
    """Sink that keeps every diagnostic it receives, in order.

    One collector belongs to one caller (a request or a CLI run); the
    extraction core never keeps diagnostics of its own.
    """

    def __init__(self) -> None:
        self.records: list[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.records.append(diagnostic)

    def messages(self, severity: Severity | None = None) -> list[str]:
        return [
            record.message
            for record in self.records
            if severity is None or record.severity == severity
        ]

    def has_errors(self) -> bool:
        return any(record.severity == Severity.ERROR for record in self.records)


class LoggingDiagnosticsSink:
    """Sink that forwards diagnostics to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("zip2workspace.diagnostics")

    def __call__(self, diagnostic: Diagnostic) -> None:
        if diagnostic.severity == Severity.ERROR:
            self.logger.error(diagnostic.message)
        else:
            self.logger.info(diagnostic.message)


def fan_out(*sinks: DiagnosticsSink | None) -> DiagnosticsSink:
    """Combine several sinks into one, skipping ``None`` entries."""
    targets = [sink for sink in sinks if sink is not None]

    def _sink(diagnostic: Diagnostic) -> None:
        for target in targets:
            target(diagnostic)

    return _sink
