"""Upload ingestion, lookups, listings and lifecycle operations over the record store."""
import logging
import os
import secrets
import shutil
import time
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List, Optional

from echochamber.core import stats
from echochamber.core.media_links import project_record
from echochamber.core.record_store import RecordStore
from echochamber.models.media import (
    DashboardStats,
    MediaPage,
    MediaRecord,
    UploadedFile,
    UploadResult,
)

logger = logging.getLogger(__name__)

ID_BYTES = 4  # 8 hex characters
MAX_ID_ATTEMPTS = 10

NO_FILE_MESSAGE = "No file was uploaded."
SERVER_ERROR_MESSAGE = "Server error processing file."


def _find(records: List[MediaRecord], media_id: str) -> Optional[int]:
    for i, r in enumerate(records):
        if r.id == media_id:
            return i
    return None


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Cleanup of %s failed: %s", path, e)


class MediaService:
    """
    All operations re-read the store. Mutations (ingest, play count, delete)
    run inside store.lock() so concurrent requests cannot lose each other's writes.
    """

    def __init__(
        self,
        store: RecordStore,
        upload_dir: Path,
        site_url: str,
        page_size: int = 10,
    ):
        self.store = store
        self.upload_dir = Path(upload_dir)
        self.site_url = site_url.rstrip("/")
        self.page_size = page_size

    def _path_for(self, record: MediaRecord) -> Path:
        return self.upload_dir / record.stored_filename

    def _mint_id(self, existing: List[MediaRecord], ext: str) -> Optional[str]:
        taken = {r.id for r in existing}
        for _ in range(MAX_ID_ATTEMPTS):
            media_id = secrets.token_hex(ID_BYTES)
            if media_id not in taken and not (self.upload_dir / f"{media_id}{ext}").exists():
                return media_id
        return None

    def ingest(self, upload: Optional[UploadedFile]) -> UploadResult:
        """Move an accepted upload into the upload dir under a fresh id and record it."""
        if upload is None:
            return UploadResult(success=False, error="no_file", message=NO_FILE_MESSAGE)

        ext = os.path.splitext(upload.original_filename or "")[1].lower()
        temp_path = Path(upload.temp_path)

        with self.store.lock():
            records = self.store.read()
            media_id = self._mint_id(records, ext)
            if media_id is None:
                logger.error("Could not mint a free media id after %d attempts", MAX_ID_ATTEMPTS)
                _discard(temp_path)
                return UploadResult(success=False, error="server_error", message=SERVER_ERROR_MESSAGE)

            stored_filename = f"{media_id}{ext}"
            dest = self.upload_dir / stored_filename
            try:
                shutil.move(str(temp_path), str(dest))
            except OSError as e:
                logger.error("Error moving %s to %s: %s", temp_path, dest, e)
                _discard(temp_path)
                return UploadResult(success=False, error="server_error", message=SERVER_ERROR_MESSAGE)

            record = MediaRecord(
                id=media_id,
                stored_filename=stored_filename,
                original_filename=upload.original_filename,
                mime_type=upload.mime_type,
                upload_timestamp=int(time.time()),
                play_count=0,
            )
            records.append(record)
            if not self.store.write(records):
                _discard(dest)
                return UploadResult(success=False, error="server_error", message=SERVER_ERROR_MESSAGE)

        logger.info("Stored upload %r as %s (%s)", upload.original_filename, stored_filename, upload.mime_type)
        return UploadResult(success=True, id=media_id, mime_type=upload.mime_type)

    def get_by_id(self, media_id: str) -> Optional[MediaRecord]:
        """Return the record only if its file is still on disk."""
        records = self.store.read()
        i = _find(records, media_id)
        if i is None:
            return None
        record = records[i]
        if not self._path_for(record).is_file():
            return None
        return record

    def list_page(self, sort_key: str = stats.SORT_NEWEST, page: int = 1) -> MediaPage:
        records = stats.sort_records(self.store.read(), sort_key)
        items, total_pages = stats.paginate(records, page, self.page_size)
        return MediaPage(
            items=[project_record(r, self.site_url) for r in items],
            total_pages=total_pages,
            current_page=page,
        )

    def dashboard_stats(self, today: Optional[date] = None) -> DashboardStats:
        if today is None:
            today = datetime.now(timezone.utc).date()
        records = self.store.read()
        return DashboardStats(
            total_count=len(records),
            top_popular=[project_record(r, self.site_url) for r in stats.top_popular(records)],
            newest=[project_record(r, self.site_url) for r in stats.newest(records)],
            upload_histogram=stats.upload_histogram(records, today),
        )

    def increment_play_count(self, media_id: str) -> int:
        """Add one play and return the persisted count; 0 if the id is unknown."""
        with self.store.lock():
            records = self.store.read()
            i = _find(records, media_id)
            if i is None:
                return 0
            records[i].play_count += 1
            if not self.store.write(records):
                logger.error("Play count for %s not saved", media_id)
                return records[i].play_count - 1
            return records[i].play_count

    def delete_media(self, media_id: str) -> bool:
        """Remove file and record. False when no record matched or the store could not be saved."""
        with self.store.lock():
            records = self.store.read()
            i = _find(records, media_id)
            if i is None:
                return False
            path = self._path_for(records[i])
            try:
                path.unlink()
            except OSError as e:
                logger.warning("File delete failed, removing record anyway: %s (%s)", path, e)
            records.pop(i)
            if not self.store.write(records):
                logger.error("Record %s not removed from store", media_id)
                return False
        logger.info("Deleted media %s", media_id)
        return True
