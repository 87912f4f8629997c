"""Archive extraction: turn ZIP bytes into a workspace file map.

The extractor works in four steps:

1. enumerate the archive's directory table into tagged ``ArchiveEntry``
   records, dropping ``__MACOSX/`` metadata;
2. infer whether every file lives under one wrapping folder;
3. decode file contents as text on a bounded thread pool;
4. assemble the ``path -> FileRecord`` map in enumeration order.
"""

from __future__ import annotations

import io
import logging
import zlib
from collections.abc import Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import PurePosixPath
from zipfile import BadZipFile, LargeZipFile, ZipFile, ZipInfo

from zip2workspace.models.archive import (
    DEFAULT_PROJECT_NAME,
    ArchiveEntry,
    ArchiveError,
    EmptyArchiveError,
    EntryDecodeError,
    ExtractionResult,
    FileRecord,
    Severity,
)
from zip2workspace.services.diagnostics import DiagnosticsSink, emit
from zip2workspace.settings import DEFAULT_DECODE_WORKERS, DEFAULT_MAX_ENTRY_BYTES

logger = logging.getLogger(__name__)

METADATA_PREFIX = "__MACOSX/"
ZIP_SUFFIX = ".zip"

_ENTRY_READ_ERRORS = (
    BadZipFile,
    EOFError,
    NotImplementedError,
    OSError,
    RuntimeError,
    ValueError,
    zlib.error,
)


def derive_project_name(archive_file_name: str | None) -> str:
    """Return the project name for an uploaded archive.

    Args:
        archive_file_name: File name the archive was uploaded under.

    Returns:
        The base name with one trailing ``.zip`` removed, or
        ``DEFAULT_PROJECT_NAME`` when nothing is left.
    """
    name = PurePosixPath((archive_file_name or "").replace("\\", "/")).name
    # A name without a .zip suffix is kept whole; only an empty remainder
    # falls back to the default.
    if name.lower().endswith(ZIP_SUFFIX):
        name = name[: -len(ZIP_SUFFIX)]
    return name if name.strip() else DEFAULT_PROJECT_NAME


def _clean_raw_path(filename: str) -> str:
    return filename.replace("\\", "/").lstrip("/")


def _is_metadata(raw_path: str) -> bool:
    return raw_path.startswith(METADATA_PREFIX)


def infer_root(file_paths: Iterable[str]) -> str | None:
    """Return the single first segment shared by every path, if there is one."""
    roots = {path.split("/", 1)[0] for path in file_paths}
    if len(roots) == 1:
        return roots.pop()
    return None


def normalize_path(raw_path: str, root: str | None) -> str:
    """Strip ``root`` from ``raw_path`` when it is the path's leading folder.

    A top-level file is never stripped, so an archive holding a single
    ``index.js`` keeps that name.
    """
    segments = raw_path.split("/")
    if root is not None and len(segments) > 1 and segments[0] == root:
        segments = segments[1:]
    return "/".join(segments).strip("/")


def decode_entry(entry: ArchiveEntry) -> str:
    """Decode an entry's bytes as UTF-8 text.

    Raises:
        EntryDecodeError: If the entry has no content or is not UTF-8.
    """
    if entry.raw_content is None:
        raise EntryDecodeError(entry.raw_path, "entry has no content")
    try:
        return entry.raw_content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise EntryDecodeError(entry.raw_path, "content is not valid UTF-8 text") from exc


class ArchiveExtractor:
    """Extracts ZIP archives into ``ExtractionResult`` objects.

    The extractor keeps no state between calls; ``diagnostics`` receives
    per-entry skip reports, ``max_workers`` bounds the decode pool and
    ``max_entry_bytes`` caps the decompressed size of any one entry.
    """

    def __init__(
        self,
        diagnostics: DiagnosticsSink | None = None,
        max_workers: int = DEFAULT_DECODE_WORKERS,
        max_entry_bytes: int = DEFAULT_MAX_ENTRY_BYTES,
    ) -> None:
        self.diagnostics = diagnostics
        self.max_workers = max(1, max_workers)
        self.max_entry_bytes = max(1, max_entry_bytes)

    def extract(self, archive_bytes: bytes, archive_file_name: str) -> ExtractionResult:
        """Extract ``archive_bytes`` into a normalized file map.

        Args:
            archive_bytes: Raw ZIP archive.
            archive_file_name: Name the archive was uploaded under; used only
                to derive the project name.

        Returns:
            The file map and project name.

        Raises:
            ArchiveError: If the archive cannot be opened.
            EmptyArchiveError: If no file survives filtering and decoding.
        """
        project_name = derive_project_name(archive_file_name)

        with self._open(archive_bytes) as archive:
            entries = self.enumerate_entries(archive)

        file_entries = [entry for entry in entries if not entry.is_directory]
        root = infer_root(entry.raw_path for entry in file_entries)
        if root is not None:
            logger.debug("Stripping common root %r from %d files", root, len(file_entries))

        files = self.materialize(file_entries, root)
        if not files:
            raise EmptyArchiveError()

        logger.debug("Extracted %d files for project %r", len(files), project_name)
        return ExtractionResult(files=files, project_name=project_name)

    def _open(self, archive_bytes: bytes) -> ZipFile:
        try:
            return ZipFile(io.BytesIO(archive_bytes))
        except (BadZipFile, LargeZipFile, EOFError, OSError, ValueError) as exc:
            raise ArchiveError(f"Not a valid ZIP archive: {exc}") from exc

    def enumerate_entries(self, archive: ZipFile) -> list[ArchiveEntry]:
        """Return tagged entries for everything outside the metadata folder.

        File bytes are read here; an entry whose bytes cannot be read is
        reported through the diagnostics sink and left out.
        """
        entries: list[ArchiveEntry] = []
        for info in archive.infolist():
            raw_path = _clean_raw_path(info.filename)
            if not raw_path or _is_metadata(raw_path):
                continue

            if info.is_dir() or raw_path.endswith("/"):
                entries.append(ArchiveEntry(raw_path=raw_path, is_directory=True))
                continue

            try:
                raw_content = self._read(archive, info, raw_path)
            except EntryDecodeError as exc:
                self._report_skip(exc)
                continue
            entries.append(
                ArchiveEntry(raw_path=raw_path, is_directory=False, raw_content=raw_content)
            )
        return entries

    def _read(self, archive: ZipFile, info: ZipInfo, raw_path: str) -> bytes:
        limit = self.max_entry_bytes
        too_large = EntryDecodeError(raw_path, f"entry is larger than {limit} bytes")
        if info.file_size > limit:
            raise too_large
        try:
            with archive.open(info) as handle:
                data = handle.read(limit + 1)
        except _ENTRY_READ_ERRORS as exc:
            raise EntryDecodeError(raw_path, str(exc) or type(exc).__name__) from exc
        # The header size can understate the real payload.
        if len(data) > limit:
            raise too_large
        return data

    def materialize(
        self, file_entries: Sequence[ArchiveEntry], root: str | None
    ) -> dict[str, FileRecord]:
        """Decode entries concurrently and assemble the file map.

        Every decode finishes before assembly starts. Results are consumed
        in enumeration order, so the last entry for a duplicated path wins.
        """
        jobs: list[tuple[str, ArchiveEntry]] = []
        for entry in file_entries:
            path = normalize_path(entry.raw_path, root)
            if path:
                jobs.append((path, entry))
        if not jobs:
            return {}

        workers = min(self.max_workers, len(jobs))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="zip-decode") as pool:
            pending: list[tuple[str, Future[str]]] = [
                (path, pool.submit(decode_entry, entry)) for path, entry in jobs
            ]

        files: dict[str, FileRecord] = {}
        for path, future in pending:
            try:
                content = future.result()
            except EntryDecodeError as exc:
                self._report_skip(exc)
                continue
            if path in files:
                emit(self.diagnostics, Severity.INFO, f"Duplicate path {path}: keeping last entry")
            files[path] = FileRecord(path=path, content=content)
        return files

    def _report_skip(self, exc: EntryDecodeError) -> None:
        logger.debug("Skipping entry %s: %s", exc.path, exc.reason)
        emit(self.diagnostics, Severity.ERROR, str(exc))


def extract_archive(
    archive_bytes: bytes,
    archive_file_name: str,
    *,
    diagnostics: DiagnosticsSink | None = None,
    max_workers: int = DEFAULT_DECODE_WORKERS,
    max_entry_bytes: int = DEFAULT_MAX_ENTRY_BYTES,
) -> ExtractionResult:
    """Extract an archive with a one-off ``ArchiveExtractor``."""
    extractor = ArchiveExtractor(
        diagnostics=diagnostics, max_workers=max_workers, max_entry_bytes=max_entry_bytes
    )
    return extractor.extract(archive_bytes, archive_file_name)
