"""Pack a workspace file map back into a ZIP archive."""

from __future__ import annotations

import io
from collections.abc import Mapping
from zipfile import ZIP_DEFLATED, ZipFile

from zip2workspace.models.archive import FileRecord, UnsafePathError

EXPORT_FILENAME = "project.zip"

_FORBIDDEN_SEGMENTS = {"", ".", ".."}


def ensure_relative_path(path: str) -> str:
    """Return ``path`` if it stays inside the folder it is unpacked into.

    Raises:
        UnsafePathError: If the path is absolute, uses ``\\``, names a drive,
            or has an empty, ``.`` or ``..`` segment.
    """
    if not path or path.startswith("/") or "\\" in path:
        raise UnsafePathError(path)
    segments = path.split("/")
    if any(segment in _FORBIDDEN_SEGMENTS for segment in segments) or ":" in segments[0]:
        raise UnsafePathError(path)
    return path


def build_archive(files: Mapping[str, FileRecord], root: str | None = None) -> bytes:
    """Return ZIP bytes holding every record under its path.

    Args:
        files: Workspace file map, keyed by normalized path.
        root: Optional folder to wrap every file in.

    Returns:
        The DEFLATE-compressed archive.

    Raises:
        UnsafePathError: If ``root`` or any key could escape the unpack folder.
    """
    prefix = f"{ensure_relative_path(root)}/" if root and root.strip() else ""
    members = [(f"{prefix}{ensure_relative_path(path)}", files[path]) for path in sorted(files)]

    buffer = io.BytesIO()
    with ZipFile(buffer, mode="w", compression=ZIP_DEFLATED) as archive:
        for name, record in members:
            archive.writestr(name, record.content.encode("utf-8"))
    return buffer.getvalue()
