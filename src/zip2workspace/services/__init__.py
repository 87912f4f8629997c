"""Services"""

from zip2workspace.services.extractor import (
    ArchiveExtractor,
    derive_project_name,
    extract_archive,
)
from zip2workspace.services.packager import build_archive
from zip2workspace.services.upload import (
    process_upload,
    process_upload_async,
    validate_upload,
)

__all__ = [
    "ArchiveExtractor",
    "build_archive",
    "derive_project_name",
    "extract_archive",
    "process_upload",
    "process_upload_async",
    "validate_upload",
]
