# /promptforge/services/zip_service.py

"""
Packs a project's latest completed file set into a ZIP archive.

Paths are written as recorded, except that a leading `/` is dropped and any
path with a `..` segment is skipped. When two records share a path, the last
one wins.
"""

import io
import logging
import re
import zipfile
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from ..core.errors import NothingToArchiveError
from ..models.generation_model import GeneratedFile

logger = logging.getLogger(__name__)

ARCHIVE_MEDIA_TYPE = "application/zip"
DEFAULT_ARCHIVE_NAME = "project"


@dataclass
class ProjectArchive:
    filename: str
    content: bytes

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


def sanitize_archive_name(project_name: Optional[str]) -> str:
    """Replaces every character outside [A-Za-z0-9] with '_'."""
    sanitized = re.sub(r"[^A-Za-z0-9]", "_", project_name or "")
    return sanitized or DEFAULT_ARCHIVE_NAME


def _archive_path(path: str) -> Optional[str]:
    normalized = path.replace("\\", "/").lstrip("/")
    if not normalized or ".." in normalized.split("/"):
        return None
    return normalized


def build_project_archive(project_name: Optional[str], files: Iterable[GeneratedFile]) -> ProjectArchive:
    """Raises NothingToArchiveError if there is nothing to put in the archive."""
    entries: Dict[str, str] = {}
    for generated_file in files:
        archive_path = _archive_path(generated_file.path)
        if archive_path is None:
            logger.warning(f"Skipping unsafe archive path: {generated_file.path!r}")
            continue
        if archive_path in entries:
            logger.warning(f"Duplicate path {archive_path!r} in file set; keeping the last occurrence.")
        entries[archive_path] = generated_file.content

    if not entries:
        raise NothingToArchiveError("No files to download")

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for archive_path, content in entries.items():
            archive.writestr(archive_path, content)

    filename = f"{sanitize_archive_name(project_name)}.zip"
    logger.info(f"Built archive {filename} with {len(entries)} file(s)")
    return ProjectArchive(filename=filename, content=buffer.getvalue())
