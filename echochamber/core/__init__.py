"""Core services: record store, media ingestion and queries."""
from echochamber.core.media_service import MediaService
from echochamber.core.record_store import RecordStore

__all__ = ["MediaService", "RecordStore"]
