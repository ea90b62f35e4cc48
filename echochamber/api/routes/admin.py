"""Admin dashboard: PIN check, stats, media management and uploads."""
import hmac
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Header, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from echochamber.api.state import AppState, get_state
from echochamber.api.uploads import receive_upload, upload_error_status
from echochamber.core.stats import SORT_NEWEST

logger = logging.getLogger(__name__)

router = APIRouter()


class LoginBody(BaseModel):
    pin: str = ""


class DeleteBody(BaseModel):
    media_id: str


def _pin_matches(submitted: Optional[str], expected: str) -> bool:
    if not submitted:
        return False
    return hmac.compare_digest(submitted.encode(), expected.encode())


def require_admin(
    x_admin_pin: Optional[str] = Header(None),
    state: AppState = Depends(get_state),
) -> AppState:
    if not _pin_matches(x_admin_pin, state.admin_pin):
        raise HTTPException(status_code=403, detail="Authentication required.")
    return state


@router.post("/login")
def login(body: LoginBody, state: AppState = Depends(get_state)):
    """Verify the shared admin PIN."""
    if not _pin_matches(body.pin, state.admin_pin):
        logger.warning("Rejected admin login")
        raise HTTPException(status_code=401, detail="Incorrect PIN.")
    return {"success": True}


@router.get("/api/stats")
def get_stats(state: AppState = Depends(require_admin)):
    """Counts, popular and newest uploads, 30-day upload histogram."""
    return state.media_service.dashboard_stats().to_dict()


@router.get("/manage")
def manage_media(
    page: int = Query(1, ge=1),
    sort: str = Query(SORT_NEWEST),
    state: AppState = Depends(require_admin),
):
    """One page of the media library."""
    data = state.media_service.list_page(sort, page).to_dict()
    data["sort_order"] = sort
    return data


@router.post("/upload")
def admin_upload(
    media: Optional[UploadFile] = File(None),
    state: AppState = Depends(require_admin),
):
    uploaded = receive_upload(media, state.upload_dir) if media is not None else None
    result = state.media_service.ingest(uploaded)
    if not result.success:
        return JSONResponse(status_code=upload_error_status(result), content=result.to_dict())
    return result.to_dict()


@router.post("/manage/delete")
def delete_media(body: DeleteBody, state: AppState = Depends(require_admin)):
    if not state.media_service.delete_media(body.media_id):
        raise HTTPException(status_code=404, detail="Not found.")
    return {"success": True, "message": "Deleted."}
