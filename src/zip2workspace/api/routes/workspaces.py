"""Workspace routes for the API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, File, HTTPException, Response, UploadFile, status

from zip2workspace.api.schemas.workspaces import (
    WorkspaceExportRequest,
    WorkspaceUploadResponse,
)
from zip2workspace.models.archive import (
    ArchiveError,
    EmptyArchiveError,
    ExtractionTimeoutError,
    FileRecord,
    UnsafePathError,
    UploadRejectedError,
)
from zip2workspace.services.diagnostics import (
    DiagnosticsCollector,
    LoggingDiagnosticsSink,
    fan_out,
)
from zip2workspace.services.packager import EXPORT_FILENAME, build_archive
from zip2workspace.services.upload import process_upload_async
from zip2workspace.settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workspaces", tags=["workspaces"])

_CHUNK_SIZE = 8192


async def _read_upload(file: UploadFile, limit: int) -> bytes:
    """Read an upload in chunks, stopping as soon as it passes ``limit``."""
    buffer = bytearray()
    while True:
        chunk = await file.read(_CHUNK_SIZE)
        if not chunk:
            break
        buffer.extend(chunk)
        if len(buffer) > limit:
            raise HTTPException(
                status_code=413,
                detail=f"File too large. Maximum size is {limit // (1024 * 1024)}MB",
            )
    return bytes(buffer)


@router.post(
    "/upload",
    response_model=WorkspaceUploadResponse,
    status_code=status.HTTP_200_OK,
    summary="Load a project archive",
    description="Upload a ZIP file and return its text files keyed by normalized path.",
    responses={
        400: {"description": "Not a ZIP upload or archive cannot be read"},
        413: {"description": "Archive exceeds the upload size limit"},
        422: {"description": "Archive holds no usable files"},
        504: {"description": "Extraction timed out"},
    },
)
async def upload_workspace_archive(
    file: Annotated[UploadFile, File(description="ZIP archive containing project files")],
) -> WorkspaceUploadResponse:
    settings = get_settings()
    filename = Path(file.filename or "").name
    archive_bytes = await _read_upload(file, settings.max_upload_bytes)

    collector = DiagnosticsCollector()
    sink = fan_out(collector, LoggingDiagnosticsSink(logger))

    try:
        result = await process_upload_async(
            archive_bytes, filename, diagnostics=sink, settings=settings
        )
    except UploadRejectedError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    except ArchiveError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except EmptyArchiveError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ExtractionTimeoutError as exc:
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(exc)) from exc

    return WorkspaceUploadResponse.from_result(result, collector.records)


@router.post(
    "/export",
    summary="Download a workspace as a ZIP archive",
    response_class=Response,
    responses={
        200: {"content": {"application/zip": {}}},
        400: {"description": "A path would escape the archive folder"},
    },
)
def export_workspace_archive(payload: WorkspaceExportRequest) -> Response:
    files = {
        path: FileRecord(path=path, content=item.content) for path, item in payload.files.items()
    }
    try:
        archive_bytes = build_archive(files, root=payload.project_name)
    except UnsafePathError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return Response(
        content=archive_bytes,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
