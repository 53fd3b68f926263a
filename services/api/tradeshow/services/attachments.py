"""Local storage for portal attachments.

Files are written under UPLOAD_DIR as {portal_id}/{timestamp}-{random}.{ext}
and exposed under UPLOAD_PUBLIC_BASE_URL (mounted as static files by the app).
"""

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from pathlib import Path
import secrets

from tradeshow.settings import get_settings

logger = logging.getLogger("uvicorn.error")


@dataclass
class StoredFile:
    relative_path: str
    public_url: str
    size: int


def ensure_upload_dir() -> Path:
    """Ensure upload directory exists."""
    upload_dir = Path(get_settings().upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


def _extension(file_name: str) -> str:
    suffix = Path(file_name).suffix.lstrip(".")
    return suffix or "bin"


def save_attachment(portal_id: int, file_name: str, data: bytes) -> StoredFile:
    """Write an uploaded file and return where it can be fetched from."""
    settings = get_settings()
    portal_dir = ensure_upload_dir() / str(portal_id)
    portal_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")
    stored_name = f"{timestamp}-{secrets.token_hex(4)}.{_extension(file_name)}"
    (portal_dir / stored_name).write_bytes(data)

    relative_path = f"{portal_id}/{stored_name}"
    public_url = f"{settings.upload_public_base_url.rstrip('/')}/{relative_path}"
    logger.info(f"Saved attachment {file_name} for portal {portal_id} to {relative_path}")
    return StoredFile(relative_path=relative_path, public_url=public_url, size=len(data))


def remove_attachment(relative_path: str) -> None:
    """Delete a stored file (used when the DB insert fails after the write)."""
    path = ensure_upload_dir() / relative_path
    path.unlink(missing_ok=True)
