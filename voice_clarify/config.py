from __future__ import annotations

import os
from typing import List, Tuple

LLM_DEBUG = os.getenv("LLM_DEBUG", "0") == "1"


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    # Empty entries are meaningful for generic titles ("" is a placeholder).
    return tuple(part.strip().lower() for part in raw.split(","))


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


# -------------------------
# Clarification defaults
# -------------------------
DEFAULT_GENERIC_TITLES: Tuple[str, ...] = (
    "meeting",
    "event",
    "call",
    "appointment",
    "task",
    "voice event",
    "",
)
DEFAULT_FILLER_PHRASES: Tuple[str, ...] = (
    "um",
    "umm",
    "uh",
    "it's",
    "it is",
    "it should be called",
    "call it",
    "name it",
    "titled",
    "title",
    "the title is",
)
DEFAULT_MAX_TITLE_LENGTH = 200

GENERIC_TITLES = _env_list("VOICE_GENERIC_TITLES", DEFAULT_GENERIC_TITLES)
FILLER_PHRASES = tuple(
    phrase for phrase in _env_list("VOICE_FILLER_PHRASES", DEFAULT_FILLER_PHRASES)
    if phrase)
MAX_TITLE_LENGTH = _env_int("VOICE_MAX_TITLE_LENGTH", DEFAULT_MAX_TITLE_LENGTH)
MAX_CLARIFICATION_TURNS = _env_int("VOICE_MAX_CLARIFICATION_TURNS", 8)
MAX_COMPLETED_SESSIONS = _env_int("VOICE_MAX_COMPLETED_SESSIONS", 256)

MEETING_CATEGORY = "meetings"

# -------------------------
# HTTP
# -------------------------
API_BASE = os.getenv("API_BASE", "/api")
FRONTEND_BASE_URL = os.getenv("FRONTEND_BASE_URL", "").rstrip("/")
CORS_ALLOW_ORIGINS = os.getenv("CORS_ALLOW_ORIGINS", "")
cors_origins: List[str] = []
if FRONTEND_BASE_URL:
    cors_origins.append(FRONTEND_BASE_URL)
if CORS_ALLOW_ORIGINS:
    cors_origins.extend(
        [origin.strip() for origin in CORS_ALLOW_ORIGINS.split(",") if origin.strip()])
