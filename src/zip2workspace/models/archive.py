"""Data models for archive extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

DEFAULT_PROJECT_NAME = "Untitled Project"


class WorkspaceIngestError(Exception):
    """Base class for errors raised while turning an upload into a workspace."""


class ArchiveError(WorkspaceIngestError):
    """Raised when the archive cannot be opened or its directory table parsed."""


class EmptyArchiveError(WorkspaceIngestError):
    """Raised when a readable archive yields no usable files."""

    def __init__(self, message: str = "No valid files found in ZIP") -> None:
        super().__init__(message)


class EntryDecodeError(WorkspaceIngestError):
    """Raised when a single entry cannot be read or decoded as text.

    Attributes:
        path: Raw path of the entry inside the archive.
        reason: Short description of the underlying failure.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to read file {path}: {reason}")
        self.path = path
        self.reason = reason


class UploadRejectedError(WorkspaceIngestError):
    """Raised by the upload layer before extraction is attempted."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class ExtractionTimeoutError(WorkspaceIngestError):
    """Raised when extraction does not finish within the configured time."""


class UnsafePathError(WorkspaceIngestError):
    """Raised when a path would escape the folder an archive is unpacked into."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Unsafe path in archive: {path!r}")
        self.path = path


class Severity(StrEnum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single user-facing progress or problem report."""

    severity: Severity
    message: str


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """One item of the archive's directory table.

    Attributes:
        raw_path: Separator-normalized path as stored in the archive.
        is_directory: Whether the entry is a directory marker.
        raw_content: Entry bytes, ``None`` for directories.
    """

    raw_path: str
    is_directory: bool
    raw_content: bytes | None = None


@dataclass(frozen=True, slots=True)
class FileRecord:
    """Text file ready to be loaded into a workspace."""

    path: str
    content: str

    def to_payload(self) -> dict[str, str]:
        return {"content": self.content, "path": self.path}


@dataclass(slots=True)
class ExtractionResult:
    """Result of a successful extraction.

    Attributes:
        files: Mapping from normalized path to its file record.
        project_name: Name derived from the archive's file name.
    """

    files: dict[str, FileRecord] = field(default_factory=dict)
    project_name: str = DEFAULT_PROJECT_NAME

    @property
    def file_count(self) -> int:
        return len(self.files)

    def to_payload(self) -> dict[str, object]:
        """Return the wire shape handed to workspace consumers."""
        return {
            "files": {path: record.to_payload() for path, record in self.files.items()},
            "projectName": self.project_name,
        }
