from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from fastapi import WebSocket

logger = logging.getLogger(__name__)


@dataclass
class Conn:
    conn_id: str
    ws: WebSocket
    pid: Optional[str] = None


class WSManager:
    """
    In-memory subscriber registry.
    - room_id -> conn_id -> websocket
    Transport-only: no game rules.
    """
    def __init__(self) -> None:
        self._rooms: Dict[str, Dict[str, Conn]] = {}
        self._lock = asyncio.Lock()

    async def add(self, room_id: str, conn_id: str, ws: WebSocket, pid: Optional[str] = None) -> None:
        async with self._lock:
            self._rooms.setdefault(room_id, {})[conn_id] = Conn(conn_id=conn_id, ws=ws, pid=pid)

    async def remove(self, room_id: str, conn_id: str) -> None:
        async with self._lock:
            room = self._rooms.get(room_id)
            if not room:
                return
            room.pop(conn_id, None)
            if not room:
                self._rooms.pop(room_id, None)

    async def broadcast(self, room_id: str, event: dict) -> None:
        # copy conns under lock, send outside lock
        async with self._lock:
            conns = list(self._rooms.get(room_id, {}).values())

        for c in conns:
            try:
                await c.ws.send_json(event)
            except Exception as e:
                # dead socket; ws.py cleans it up on disconnect
                logger.debug(f"drop event {event.get('type')} for {room_id}/{c.conn_id}: {e}")
