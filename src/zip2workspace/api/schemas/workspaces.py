"""Pydantic schemas for workspace API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from zip2workspace.models.archive import Diagnostic, ExtractionResult, Severity


class WorkspaceFile(BaseModel):
    """A single text file of a workspace."""

    path: str
    content: str


class DiagnosticEntry(BaseModel):
    """Progress or problem report produced while handling an upload."""

    severity: Severity
    message: str

    @classmethod
    def from_diagnostic(cls, diagnostic: Diagnostic) -> DiagnosticEntry:
        return cls(severity=diagnostic.severity, message=diagnostic.message)


class WorkspaceUploadResponse(BaseModel):
    """Response schema for the archive upload endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    project_name: str = Field(alias="projectName")
    file_count: int = Field(alias="fileCount")
    files: dict[str, WorkspaceFile]
    diagnostics: list[DiagnosticEntry] = Field(default_factory=list)

    @classmethod
    def from_result(
        cls, result: ExtractionResult, diagnostics: list[Diagnostic]
    ) -> WorkspaceUploadResponse:
        return cls(
            project_name=result.project_name,
            file_count=result.file_count,
            files={
                path: WorkspaceFile(path=record.path, content=record.content)
                for path, record in result.files.items()
            },
            diagnostics=[DiagnosticEntry.from_diagnostic(item) for item in diagnostics],
        )


class WorkspaceExportRequest(BaseModel):
    """Workspace contents to pack into a downloadable archive."""

    model_config = ConfigDict(populate_by_name=True)

    project_name: str | None = Field(default=None, alias="projectName")
    files: dict[str, WorkspaceFile]
