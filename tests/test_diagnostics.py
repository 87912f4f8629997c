"""Tests for diagnostics sinks."""

from __future__ import annotations

import logging

import pytest

from zip2workspace.models import Diagnostic, Severity
from zip2workspace.services.diagnostics import (
    DiagnosticsCollector,
    LoggingDiagnosticsSink,
    emit,
    fan_out,
)


class TestDiagnosticsCollector:
    def test_keeps_records_in_order(self) -> None:
        collector = DiagnosticsCollector()

        emit(collector, Severity.INFO, "first")
        emit(collector, Severity.ERROR, "second")

        assert collector.records == [
            Diagnostic(severity=Severity.INFO, message="first"),
            Diagnostic(severity=Severity.ERROR, message="second"),
        ]
        assert collector.messages() == ["first", "second"]
        assert collector.messages(Severity.ERROR) == ["second"]
        assert collector.has_errors()

    def test_collectors_are_independent(self) -> None:
        first = DiagnosticsCollector()
        second = DiagnosticsCollector()

        emit(first, Severity.SUCCESS, "done")

        assert second.records == []


def test_emit_without_sink_is_noop() -> None:
    emit(None, Severity.INFO, "ignored")


def test_logging_sink_maps_severity(caplog: pytest.LogCaptureFixture) -> None:
    sink = LoggingDiagnosticsSink(logging.getLogger("tests.diagnostics"))

    with caplog.at_level(logging.INFO, logger="tests.diagnostics"):
        sink(Diagnostic(severity=Severity.SUCCESS, message="loaded"))
        sink(Diagnostic(severity=Severity.ERROR, message="broken"))

    levels = [(record.levelno, record.getMessage()) for record in caplog.records]
    assert levels == [(logging.INFO, "loaded"), (logging.ERROR, "broken")]


def test_fan_out_skips_missing_sinks() -> None:
    first = DiagnosticsCollector()
    second = DiagnosticsCollector()
    sink = fan_out(first, None, second)

    emit(sink, Severity.INFO, "hello")

    assert first.messages() == ["hello"]
    assert second.messages() == ["hello"]
