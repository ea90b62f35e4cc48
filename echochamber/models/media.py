"""Media record metadata and the result shapes handed to the HTTP layer."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class MediaRecord:
    """Stored entry: one uploaded audio/video file."""
    id: str
    stored_filename: str  # <id><ext>, relative to the upload dir
    original_filename: str
    mime_type: str
    upload_timestamp: int  # seconds since epoch
    play_count: int = 0

    @property
    def is_video(self) -> bool:
        return self.mime_type.startswith("video")

    @classmethod
    def from_dict(cls, item: dict) -> "MediaRecord":
        """Build from a persisted JSON object. Raises KeyError/TypeError/ValueError if malformed."""
        if not isinstance(item, dict):
            raise TypeError(f"expected object, got {type(item).__name__}")
        return cls(
            id=str(item["id"]),
            stored_filename=str(item["filename"]),
            original_filename=str(item.get("original_filename") or ""),
            mime_type=str(item.get("mimetype") or ""),
            upload_timestamp=int(item.get("upload_time") or 0),
            play_count=int(item.get("plays") or 0),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "filename": self.stored_filename,
            "original_filename": self.original_filename,
            "mimetype": self.mime_type,
            "upload_time": self.upload_timestamp,
            "plays": self.play_count,
        }


@dataclass
class UploadedFile:
    """File already accepted by the upload gate (type and size checked)."""
    original_filename: str
    mime_type: str
    temp_path: Path
    size: int


@dataclass
class UploadResult:
    success: bool
    id: Optional[str] = None
    mime_type: Optional[str] = None
    error: Optional[str] = None  # "no_file" | "server_error"
    message: Optional[str] = None

    def to_dict(self) -> dict:
        if self.success:
            return {"success": True, "id": self.id, "mimetype": self.mime_type}
        return {"success": False, "message": self.message}


@dataclass
class MediaPage:
    items: List[dict]
    total_pages: int
    current_page: int

    def to_dict(self) -> dict:
        return {
            "media_tracks": self.items,
            "total_pages": self.total_pages,
            "current_page": self.current_page,
        }


@dataclass
class UploadHistogram:
    """Parallel sequences, oldest day first."""
    labels: List[str] = field(default_factory=list)
    counts: List[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"labels": self.labels, "data": self.counts}


@dataclass
class DashboardStats:
    total_count: int
    top_popular: List[dict]
    newest: List[dict]
    upload_histogram: UploadHistogram

    def to_dict(self) -> dict:
        return {
            "total_media": self.total_count,
            "top_popular_media": self.top_popular,
            "newest_media": self.newest,
            "upload_stats": self.upload_histogram.to_dict(),
        }
