"""
Upload gate for CVs, company logos and images.

Files are validated by media type and size, then stored either in memory
(serverless deployments, where the filesystem is read-only) or on disk under
a field-specific directory.
"""

import os
import secrets
import time
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from cachetools import TTLCache
from fastapi import UploadFile

from jobpool.config import settings
from jobpool.errors import BadRequestError
from jobpool.log import get_logger

logger = get_logger(__name__)

SERVERLESS_ENV_VARS = (
    "VERCEL",
    "VERCEL_ENV",
    "NOW_REGION",
    "AWS_LAMBDA_FUNCTION_NAME",
    "LAMBDA_TASK_ROOT",
)

CV_FIELDS = {"cv", "resume"}
DOCUMENT_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


@dataclass
class StoredFile:
    """An accepted upload and where it ended up."""

    field: str
    original_name: str
    content_type: str
    size: int
    path: str


def is_serverless(environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return any(env.get(name) for name in SERVERLESS_ENV_VARS)


def destination_for(field: str) -> str:
    """Subdirectory an uploaded field is stored under."""
    if field in CV_FIELDS:
        return "cvs"
    if field == "logo":
        return "company-logos"
    if field in ("jobImage", "image"):
        return "job-images"
    return "profile-images"


def check_file_type(field: str, content_type: str | None) -> None:
    """Allow images anywhere, PDF/DOC/DOCX only for CV fields."""
    content_type = content_type or ""
    if content_type.startswith("image/"):
        return
    if content_type in DOCUMENT_TYPES and field in CV_FIELDS:
        return
    raise BadRequestError("Invalid file type. Only images and PDF/DOC files are allowed.")


def make_filename(field: str, original_name: str) -> str:
    suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
    return f"{field}-{suffix}{Path(original_name).suffix}"


class DiskStorage:
    """Writes files below ``root/<destination>/``."""

    kind = "disk"

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def save(self, field: str, filename: str, content: bytes) -> str:
        directory = self.root / destination_for(field)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_bytes(content)
        return path.as_posix()


class MemoryStorage:
    """Keeps file bytes in a bounded TTL cache, keyed by ``memory://`` reference."""

    kind = "memory"

    def __init__(self, maxsize: int = 256, ttl: int = 3600):
        self.files: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)

    def save(self, field: str, filename: str, content: bytes) -> str:
        reference = f"memory://{destination_for(field)}/{filename}"
        self.files[reference] = content
        return reference


def select_storage(environ: Mapping[str, str] | None = None) -> DiskStorage | MemoryStorage:
    """Pick the storage backend from UPLOAD_STORAGE, falling back to environment detection."""
    mode = settings.upload_storage.lower()
    if mode == "memory" or (mode == "auto" and is_serverless(environ)):
        return MemoryStorage()
    return DiskStorage(settings.upload_dir)


_storage = None


def get_storage() -> DiskStorage | MemoryStorage:
    """FastAPI dependency returning the process-wide storage backend."""
    global _storage
    if _storage is None:
        _storage = select_storage()
        logger.info(f"Upload storage: {_storage.kind}")
    return _storage


async def receive_upload(file: UploadFile, field: str, storage: DiskStorage | MemoryStorage) -> StoredFile:
    """Validate an incoming file and persist it through ``storage``."""
    check_file_type(field, file.content_type)

    content = await file.read()
    if len(content) > settings.max_upload_size:
        limit_mb = settings.max_upload_size // (1024 * 1024)
        raise BadRequestError(f"File too large. Maximum size is {limit_mb} MB.")

    original_name = file.filename or field
    path = storage.save(field, make_filename(field, original_name), content)
    logger.info(f"Stored {field} upload ({len(content)} bytes) at {path}")

    return StoredFile(
        field=field,
        original_name=original_name,
        content_type=file.content_type or "",
        size=len(content),
        path=path,
    )
