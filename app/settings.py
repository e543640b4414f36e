# app/settings.py
from __future__ import annotations

from pydantic import BaseModel
import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "y", "on")


class Settings(BaseModel):
    APP_NAME: str = "hangman-server"

    # Returning-player history: "memory" | "redis"
    SESSION_BACKEND: str = "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    SESSION_TTL_SEC: int = 0  # 0 = records never expire

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Dev
    LOG_LEVEL: str = "INFO"

    # WebSocket origin policy (comma-separated)
    WS_ALLOWED_ORIGINS: str = "http://localhost:4200,http://127.0.0.1:4200,null"
    # Dev helper: allow any private LAN IP on the frontend port
    WS_ALLOW_LAN_ORIGINS: bool = True

    # Game rules
    WORD_GUESS_REQUIRES_TURN: bool = False
    ROTATE_MASTER_ON_RESTART: bool = False
    MAX_WORD_LEN: int = 50


def get_settings() -> Settings:
    return Settings(
        APP_NAME=os.getenv("APP_NAME", "hangman-server"),
        SESSION_BACKEND=os.getenv("SESSION_BACKEND", "memory").lower(),
        REDIS_URL=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
        SESSION_TTL_SEC=int(os.getenv("SESSION_TTL_SEC", "0")),
        HOST=os.getenv("HOST", "0.0.0.0"),
        PORT=int(os.getenv("PORT", "8000")),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),

        WS_ALLOWED_ORIGINS=os.getenv(
            "WS_ALLOWED_ORIGINS",
            "http://localhost:4200,http://127.0.0.1:4200,null",
        ),
        WS_ALLOW_LAN_ORIGINS=_flag("WS_ALLOW_LAN_ORIGINS", "true"),

        WORD_GUESS_REQUIRES_TURN=_flag("WORD_GUESS_REQUIRES_TURN", "false"),
        ROTATE_MASTER_ON_RESTART=_flag("ROTATE_MASTER_ON_RESTART", "false"),
        MAX_WORD_LEN=int(os.getenv("MAX_WORD_LEN", "50")),
    )
