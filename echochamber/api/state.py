"""Shared application state (injected into routes)."""
from pathlib import Path
from typing import Optional

from echochamber import config
from echochamber.core.media_service import MediaService
from echochamber.core.record_store import RecordStore


class AppState:
    def __init__(
        self,
        database_path: Optional[Path] = None,
        upload_dir: Optional[Path] = None,
        site_url: Optional[str] = None,
        admin_pin: Optional[str] = None,
    ) -> None:
        self.upload_dir = Path(upload_dir or config.UPLOAD_DIR)
        self.store = RecordStore(database_path or config.DATABASE_PATH)
        self.media_service = MediaService(
            self.store,
            self.upload_dir,
            site_url or config.SITE_URL,
            page_size=config.PAGE_SIZE,
        )
        self.admin_pin = admin_pin if admin_pin is not None else config.ADMIN_PIN

    def initialize(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        self.store.initialize()


_state = AppState()


def get_state() -> AppState:
    return _state
