"""FastAPI app, CORS, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from echochamber.config import LOG_LEVEL, SITE_TITLE

# Configure logging in the worker process (uvicorn --reload spawns a fresh one)
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(levelname)s: %(name)s: %(message)s",
)

from echochamber.api.state import AppState, get_state
from echochamber.api.routes import admin, media

__all__ = ["app", "AppState", "get_state"]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    state = app.dependency_overrides.get(get_state, get_state)()
    state.initialize()
    logger.info("Record store ready at %s", state.store.path)
    yield


app = FastAPI(
    title=f"{SITE_TITLE} API",
    description="Self-hosted audio/video sharing",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(admin.router, prefix="/admin", tags=["admin"])
app.include_router(media.router, tags=["media"])
