"""Public upload and playback endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import RedirectResponse

from echochamber import config
from echochamber.api.state import AppState, get_state
from echochamber.api.uploads import receive_upload, upload_error_status
from echochamber.core.media_links import media_kind_prefix, project_record

router = APIRouter()


@router.get("/")
def home():
    """Site info for the upload page."""
    return {
        "title": config.SITE_TITLE,
        "max_file_size": config.MAX_UPLOAD_BYTES,
        "max_file_size_text": config.UPLOAD_LIMIT_TEXT,
    }


@router.post("/upload")
def upload_media(
    media: Optional[UploadFile] = File(None),
    state: AppState = Depends(get_state),
):
    """Public upload. Returns id and mimetype so the client can pick /v/ or /a/."""
    uploaded = receive_upload(media, state.upload_dir) if media is not None else None
    result = state.media_service.ingest(uploaded)
    if not result.success:
        raise HTTPException(status_code=upload_error_status(result), detail=result.message)
    return result.to_dict()


def _watch(media_id: str, prefix: str, state: AppState):
    media = state.media_service.get_by_id(media_id)
    if media is None:
        raise HTTPException(status_code=404, detail="Media not found")

    # /v/ is for video and /a/ for audio; send the client to the right one
    expected = media_kind_prefix(media.mime_type)
    if expected != prefix:
        return RedirectResponse(url=f"/{expected}/{media_id}", status_code=302)

    plays = state.media_service.increment_play_count(media_id)
    media.play_count = plays
    action = "Watch" if media.is_video else "Listen to"
    return {
        "media": project_record(media, state.media_service.site_url),
        "plays": plays,
        "title": f"{media.original_filename} - {config.SITE_TITLE}",
        "description": f"{action} {media.original_filename} on {config.SITE_TITLE}",
    }


@router.get("/v/{media_id}")
def watch_video(media_id: str, state: AppState = Depends(get_state)):
    return _watch(media_id, "v", state)


@router.get("/a/{media_id}")
def listen_audio(media_id: str, state: AppState = Depends(get_state)):
    return _watch(media_id, "a", state)
