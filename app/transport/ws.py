from __future__ import annotations

import ipaddress
import uuid
from typing import Optional
from urllib.parse import urlparse

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.domain.game.handlers import handle_disconnect
from app.domain.room.results import room_to_summary
from app.transport.dispatcher import run_in_room
from app.transport.protocols import OutError, OutRoomSnapshot

router = APIRouter()

FRONTEND_PORT = 4200


def _is_private_ip(host: str) -> bool:
    """Return True if host is a private IP (192.168.x.x, 10.x.x.x, 172.16-31.x.x)."""
    try:
        ip = ipaddress.ip_address(host)
        return ip.is_private
    except ValueError:
        return False


def origin_allowed(origin: Optional[str], settings) -> bool:
    if origin is None:
        return True
    allowed = {o.strip() for o in settings.WS_ALLOWED_ORIGINS.split(",") if o.strip()}
    if origin in allowed:
        return True
    if settings.WS_ALLOW_LAN_ORIGINS:
        o = urlparse(origin)
        return _is_private_ip(o.hostname or "") and o.port == FRONTEND_PORT
    return False


@router.websocket("/ws/{room_id}")
async def ws_room(websocket: WebSocket, room_id: str, player_id: Optional[str] = None):
    """
    Subscribe to a room's events. Clients act through the HTTP routes; the
    socket only receives. Closing it counts as leaving with a saved record.
    """
    app = websocket.app
    if not origin_allowed(websocket.headers.get("origin"), app.state.settings):
        await websocket.close(code=1008)
        return

    await websocket.accept()

    room = app.state.registry.find_room(room_id)
    if room is None:
        err = OutError(code="ROOM_NOT_FOUND", message=f"Room {room_id} not found").model_dump()
        await websocket.send_json(err)
        await websocket.close(code=4404)
        return

    conn_id = uuid.uuid4().hex[:10]
    wsman = app.state.wsman
    await wsman.add(room_id, conn_id, websocket, pid=player_id)

    try:
        await websocket.send_json(OutRoomSnapshot(room=room_to_summary(room)).model_dump())
        while True:
            try:
                raw = await websocket.receive_json()
            except (ValueError, KeyError):
                err = OutError(code="BAD_FRAME", message="Frames must be JSON text").model_dump()
                await websocket.send_json(err)
                continue
            # only snapshot requests are understood here
            if isinstance(raw, dict) and raw.get("type") == "snapshot":
                current = app.state.registry.find_room(room_id)
                if current is not None:
                    await websocket.send_json(OutRoomSnapshot(room=room_to_summary(current)).model_dump())

    except WebSocketDisconnect:
        pass

    finally:
        # any way out of the loop counts as leaving
        await wsman.remove(room_id, conn_id)
        await run_in_room(app=app, room_id=room_id, handler=handle_disconnect, pid=player_id)
