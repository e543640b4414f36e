# app/main.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.asyncio import Redis

from app.domain.common.errors import GameError
from app.settings import Settings, get_settings
from app.store.redis_sessions import RedisSessionStore
from app.store.registry import RoomRegistry
from app.store.sessions import MemorySessionStore
from app.transport.dispatcher import RoomLocks
from app.transport.http import router as game_router
from app.transport.protocols import OutError
from app.transport.ws import router as ws_router
from app.transport.ws_manager import WSManager

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title=settings.APP_NAME)
    allowed_origins = [o.strip() for o in settings.WS_ALLOWED_ORIGINS.split(",") if o.strip()]
    if "null" not in allowed_origins:
        allowed_origins.append("null")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    r: Optional[Redis] = None
    if settings.SESSION_BACKEND == "redis":
        r = Redis.from_url(settings.REDIS_URL, decode_responses=False)
        sessions = RedisSessionStore(r, ttl_sec=settings.SESSION_TTL_SEC)
    else:
        sessions = MemorySessionStore()

    app.state.settings = settings
    app.state.redis = r
    app.state.registry = RoomRegistry(sessions)
    app.state.locks = RoomLocks()
    app.state.wsman = WSManager()

    @app.on_event("startup")
    async def _startup() -> None:
        logger.info(f"{settings.APP_NAME} starting, session backend={settings.SESSION_BACKEND}")
        if r is not None:
            await r.ping()

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        if r is not None:
            await r.close()

    @app.exception_handler(GameError)
    async def _game_error(request: Request, exc: GameError) -> JSONResponse:
        logger.info(f"{request.method} {request.url.path} -> {exc.code}: {exc}")
        return JSONResponse(
            status_code=exc.status_code,
            content=OutError(code=exc.code, message=str(exc)).model_dump(),
        )

    @app.get("/health")
    async def health():
        rooms = await app.state.registry.list_rooms()
        out = {"ok": True, "rooms": len(rooms), "sessions": settings.SESSION_BACKEND}
        if r is not None:
            out["redis"] = str(await r.ping())
        return out

    app.include_router(game_router)
    app.include_router(ws_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    s = get_settings()
    uvicorn.run("app.main:app", host=s.HOST, port=s.PORT, log_level=s.LOG_LEVEL.lower())
