"""Upload gate: MIME allow-list and size ceiling before the ingest pipeline runs."""
import logging
import tempfile
from pathlib import Path
from typing import Optional

from fastapi import HTTPException, UploadFile

from echochamber.config import ALLOWED_MIME_TYPES, MAX_UPLOAD_BYTES
from echochamber.models.media import UploadedFile, UploadResult

logger = logging.getLogger(__name__)

INVALID_TYPE_MESSAGE = "Invalid file type. Allowed: MP3, WAV, MP4, WebM."
TOO_LARGE_MESSAGE = "File too large."
SPOOL_CHUNK_BYTES = 1024 * 1024


class _TooLarge(Exception):
    pass


def upload_error_status(result: UploadResult) -> int:
    """HTTP status for a failed ingest: 400 when nothing was sent, 500 otherwise."""
    return 400 if result.error == "no_file" else 500


def _spool(src, dst, max_bytes: int) -> int:
    size = 0
    while True:
        chunk = src.read(SPOOL_CHUNK_BYTES)
        if not chunk:
            return size
        size += len(chunk)
        if size > max_bytes:
            raise _TooLarge()
        dst.write(chunk)


def receive_upload(
    file: UploadFile,
    upload_dir: Path,
    max_bytes: Optional[int] = None,
) -> UploadedFile:
    """Spool an accepted upload to a temp file inside upload_dir, stopping at the size ceiling."""
    if max_bytes is None:
        max_bytes = MAX_UPLOAD_BYTES
    if file.content_type not in ALLOWED_MIME_TYPES:
        raise HTTPException(status_code=400, detail=INVALID_TYPE_MESSAGE)

    upload_dir.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(dir=upload_dir, suffix=".part", delete=False) as buffer:
        temp_path = Path(buffer.name)
        try:
            size = _spool(file.file, buffer, max_bytes)
        except _TooLarge:
            buffer.close()
            temp_path.unlink(missing_ok=True)
            raise HTTPException(status_code=413, detail=TOO_LARGE_MESSAGE)
        except OSError as e:
            logger.error("Error spooling upload %r: %s", file.filename, e)
            buffer.close()
            temp_path.unlink(missing_ok=True)
            raise HTTPException(status_code=500, detail="Server error processing file.")

    return UploadedFile(
        original_filename=file.filename or "",
        mime_type=file.content_type,
        temp_path=temp_path,
        size=size,
    )
