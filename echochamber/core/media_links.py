"""Public playback links and the record projection used in every response."""
from echochamber.models.media import MediaRecord


def is_video_mime(mime_type: str) -> bool:
    return (mime_type or "").startswith("video")


def media_kind_prefix(mime_type: str) -> str:
    """'v' for video, 'a' for everything else."""
    return "v" if is_video_mime(mime_type) else "a"


def media_url(site_url: str, record: MediaRecord) -> str:
    return f"{site_url.rstrip('/')}/{media_kind_prefix(record.mime_type)}/{record.id}"


def project_record(record: MediaRecord, site_url: str) -> dict:
    """Persisted fields plus derived url and is_video."""
    out = record.to_dict()
    out["url"] = media_url(site_url, record)
    out["is_video"] = is_video_mime(record.mime_type)
    return out
