"""Runtime configuration for the upload layer.

Values are read from the environment on every call so tests can override
them with ``monkeypatch.setenv``:

- ``ZIP2WORKSPACE_MAX_UPLOAD_BYTES``: upper bound on an uploaded archive.
- ``ZIP2WORKSPACE_EXTRACT_TIMEOUT``: seconds allowed for one extraction.
- ``ZIP2WORKSPACE_DECODE_WORKERS``: size of the per-call decode thread pool.
- ``ZIP2WORKSPACE_MAX_ENTRY_BYTES``: largest decompressed size of one entry.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 200 * 1024 * 1024
DEFAULT_EXTRACT_TIMEOUT = 60.0
DEFAULT_DECODE_WORKERS = 8
DEFAULT_MAX_ENTRY_BYTES = 50 * 1024 * 1024


@dataclass(frozen=True, slots=True)
class Settings:
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    extract_timeout: float = DEFAULT_EXTRACT_TIMEOUT
    decode_workers: int = DEFAULT_DECODE_WORKERS
    max_entry_bytes: int = DEFAULT_MAX_ENTRY_BYTES


def _read_number(name: str, default: float, cast: type[int] | type[float]) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r, using %s", name, raw, default)
        return default
    return value


def get_settings() -> Settings:
    """Return settings built from the current environment."""
    return Settings(
        max_upload_bytes=int(
            _read_number("ZIP2WORKSPACE_MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES, int)
        ),
        extract_timeout=float(
            _read_number("ZIP2WORKSPACE_EXTRACT_TIMEOUT", DEFAULT_EXTRACT_TIMEOUT, float)
        ),
        decode_workers=int(
            _read_number("ZIP2WORKSPACE_DECODE_WORKERS", DEFAULT_DECODE_WORKERS, int)
        ),
        max_entry_bytes=int(
            _read_number("ZIP2WORKSPACE_MAX_ENTRY_BYTES", DEFAULT_MAX_ENTRY_BYTES, int)
        ),
    )
