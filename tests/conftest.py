"""Shared fixtures: a temp record store, upload dir and media service."""
import pytest

from echochamber.core.media_service import MediaService
from echochamber.core.record_store import RecordStore
from echochamber.models.media import MediaRecord, UploadedFile

SITE_URL = "http://media.test"


def make_record(id, upload_time=1_700_000_000, plays=0, mimetype="audio/mpeg", ext=".mp3"):
    return MediaRecord(
        id=str(id),
        stored_filename=f"{id}{ext}",
        original_filename=f"original-{id}{ext}",
        mime_type=mimetype,
        upload_timestamp=upload_time,
        play_count=plays,
    )


@pytest.fixture
def upload_dir(tmp_path):
    d = tmp_path / "uploads"
    d.mkdir()
    return d


@pytest.fixture
def store(tmp_path):
    s = RecordStore(tmp_path / "data" / "database.json")
    s.initialize()
    return s


@pytest.fixture
def service(store, upload_dir):
    return MediaService(store, upload_dir, SITE_URL, page_size=10)


@pytest.fixture
def make_upload(tmp_path):
    """Write a temp file as the upload gate would and describe it."""
    incoming = tmp_path / "incoming"
    incoming.mkdir()
    counter = {"n": 0}

    def _make(original_filename="song.mp3", mime_type="audio/mpeg", content=b"data"):
        counter["n"] += 1
        path = incoming / f"upload{counter['n']}.part"
        path.write_bytes(content)
        return UploadedFile(
            original_filename=original_filename,
            mime_type=mime_type,
            temp_path=path,
            size=len(content),
        )

    return _make
