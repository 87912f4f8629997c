"""Upload layer: validate an uploaded archive and hand it to the extractor."""

from __future__ import annotations

import asyncio
import logging
from pathlib import PurePosixPath

from zip2workspace.models.archive import (
    ExtractionResult,
    ExtractionTimeoutError,
    Severity,
    UploadRejectedError,
    WorkspaceIngestError,
)
from zip2workspace.services.diagnostics import DiagnosticsSink, emit
from zip2workspace.services.extractor import ZIP_SUFFIX, extract_archive
from zip2workspace.settings import Settings, get_settings

logger = logging.getLogger(__name__)

_MEGABYTE = 1024 * 1024


def validate_upload(filename: str, size_bytes: int, settings: Settings | None = None) -> None:
    """Check the upload's name and size before extraction.

    Args:
        filename: Name the archive was uploaded under.
        size_bytes: Size of the uploaded payload.
        settings: Limits to apply; read from the environment when omitted.

    Raises:
        UploadRejectedError: If the name lacks a ``.zip`` suffix (400) or the
            payload exceeds the configured ceiling (413).
    """
    settings = settings or get_settings()
    name = PurePosixPath(filename.replace("\\", "/")).name
    if not name.lower().endswith(ZIP_SUFFIX):
        raise UploadRejectedError("Please upload a ZIP file")
    if size_bytes > settings.max_upload_bytes:
        limit_mb = settings.max_upload_bytes // _MEGABYTE
        raise UploadRejectedError(
            f"File too large. Maximum size is {limit_mb}MB", status_code=413
        )


def process_upload(
    archive_bytes: bytes,
    filename: str,
    *,
    diagnostics: DiagnosticsSink | None = None,
    settings: Settings | None = None,
) -> ExtractionResult:
    """Validate and extract an uploaded archive, reporting progress.

    Raises:
        UploadRejectedError: If validation fails.
        ArchiveError: If the archive cannot be opened.
        EmptyArchiveError: If no usable file was found.
    """
    settings = settings or get_settings()
    size_bytes = len(archive_bytes)

    try:
        validate_upload(filename, size_bytes, settings)
    except UploadRejectedError as exc:
        emit(diagnostics, Severity.ERROR, str(exc))
        raise

    emit(
        diagnostics,
        Severity.INFO,
        f"Processing {filename} ({size_bytes / _MEGABYTE:.1f}MB)...",
    )

    try:
        result = extract_archive(
            archive_bytes,
            filename,
            diagnostics=diagnostics,
            max_workers=settings.decode_workers,
            max_entry_bytes=settings.max_entry_bytes,
        )
    except WorkspaceIngestError as exc:
        logger.warning("Extraction of %s failed: %s", filename, exc)
        emit(diagnostics, Severity.ERROR, f"Failed to process ZIP: {exc}")
        raise

    emit(diagnostics, Severity.SUCCESS, f"Successfully extracted {result.file_count} files")
    emit(diagnostics, Severity.INFO, "Project loaded successfully!")
    return result


async def process_upload_async(
    archive_bytes: bytes,
    filename: str,
    *,
    diagnostics: DiagnosticsSink | None = None,
    settings: Settings | None = None,
) -> ExtractionResult:
    """Run ``process_upload`` on a worker thread under the configured timeout.

    The worker thread is not interrupted on timeout; its result is discarded.

    Raises:
        ExtractionTimeoutError: If extraction exceeds ``settings.extract_timeout``.
    """
    settings = settings or get_settings()
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(
                process_upload,
                archive_bytes,
                filename,
                diagnostics=diagnostics,
                settings=settings,
            ),
            timeout=settings.extract_timeout,
        )
    except TimeoutError as exc:
        message = f"Extraction timed out after {settings.extract_timeout:g} seconds"
        emit(diagnostics, Severity.ERROR, f"Failed to process ZIP: {message}")
        raise ExtractionTimeoutError(message) from exc
