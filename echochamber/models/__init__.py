"""Data models for media records and query results."""
from echochamber.models.media import (
    DashboardStats,
    MediaPage,
    MediaRecord,
    UploadedFile,
    UploadHistogram,
    UploadResult,
)

__all__ = [
    "DashboardStats",
    "MediaPage",
    "MediaRecord",
    "UploadedFile",
    "UploadHistogram",
    "UploadResult",
]
