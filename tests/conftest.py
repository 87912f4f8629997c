from __future__ import annotations

import io
from collections.abc import Callable, Iterable
from zipfile import ZIP_DEFLATED, ZipFile

import pytest

_SETTINGS_VARS = (
    "ZIP2WORKSPACE_MAX_UPLOAD_BYTES",
    "ZIP2WORKSPACE_EXTRACT_TIMEOUT",
    "ZIP2WORKSPACE_DECODE_WORKERS",
    "ZIP2WORKSPACE_MAX_ENTRY_BYTES",
)


def create_zip_bytes(
    entries: Iterable[tuple[str, bytes]], compression: int = ZIP_DEFLATED
) -> bytes:
    """Build an in-memory ZIP archive from ``(name, data)`` pairs.

    Names ending in ``/`` become directory entries.
    """
    buffer = io.BytesIO()
    with ZipFile(buffer, "w", compression) as archive:
        for name, data in entries:
            archive.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test with default settings unless it sets its own."""
    for name in _SETTINGS_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def zip_bytes() -> Callable[..., bytes]:
    return create_zip_bytes
