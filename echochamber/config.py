"""Configuration: env, paths, upload limits, admin PIN."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of echochamber package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so SITE_URL, ADMIN_PIN etc. are set
load_dotenv(BASE_DIR / ".env")

# Site
SITE_TITLE = os.getenv("SITE_TITLE", "Echo Chamber")
SITE_URL = os.getenv("SITE_URL", "http://localhost:3000").rstrip("/")

# API
API_HOST = os.getenv("ECHO_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("ECHO_API_PORT", "3000"))

# Storage
DATA_DIR = Path(os.getenv("ECHO_DATA_DIR", str(BASE_DIR / "data")))
DATABASE_PATH = DATA_DIR / "database.json"
UPLOAD_DIR = Path(os.getenv("ECHO_UPLOAD_DIR", str(BASE_DIR / "uploads")))

# Uploads (500 MB)
MAX_UPLOAD_BYTES = 524288000
UPLOAD_LIMIT_TEXT = "500MB Max limit upload."
ALLOWED_MIME_TYPES = (
    "audio/mpeg",
    "audio/mp3",
    "audio/wav",
    "audio/ogg",
    "video/mp4",
    "video/webm",
    "video/ogg",
)

# Admin dashboard
ADMIN_PIN = os.getenv("ADMIN_PIN", "1234")
PAGE_SIZE = 10

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

