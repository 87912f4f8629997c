"""Data models and type definitions"""

from zip2workspace.models.archive import (
    DEFAULT_PROJECT_NAME,
    ArchiveEntry,
    ArchiveError,
    Diagnostic,
    EmptyArchiveError,
    EntryDecodeError,
    ExtractionResult,
    ExtractionTimeoutError,
    FileRecord,
    Severity,
    UnsafePathError,
    UploadRejectedError,
    WorkspaceIngestError,
)

__all__ = [
    "DEFAULT_PROJECT_NAME",
    "ArchiveEntry",
    "ArchiveError",
    "Diagnostic",
    "EmptyArchiveError",
    "EntryDecodeError",
    "ExtractionResult",
    "ExtractionTimeoutError",
    "FileRecord",
    "Severity",
    "UnsafePathError",
    "UploadRejectedError",
    "WorkspaceIngestError",
]
