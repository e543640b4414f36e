from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Tuple

from app.domain.common.errors import RoomNotFoundError
from app.transport.protocols import OutgoingEvent, dump_event

Handler = Callable[..., Awaitable[Tuple[Any, List[OutgoingEvent]]]]


class RoomLocks:
    """One asyncio.Lock per room id; rooms never share a lock."""

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}

    def for_room(self, room_id: str) -> asyncio.Lock:
        lock = self._locks.get(room_id)
        if lock is None:
            lock = self._locks[room_id] = asyncio.Lock()
        return lock

    def discard(self, room_id: str) -> None:
        self._locks.pop(room_id, None)

    def __contains__(self, room_id: str) -> bool:
        return room_id in self._locks


async def run_in_room(*, app, room_id: str, handler: Handler, **kwargs: Any) -> Any:
    """
    Transport layer calls this for every room-scoped request.
    - holds the room lock for the whole handler call
    - publishes the handler's to_room events in order before releasing it,
      so two requests on one room never interleave their broadcasts
    - returns the handler's response

    A handler that raises has not mutated anything and publishes nothing.
    Locks asked for by unknown room ids are dropped again.
    """
    locks = app.state.locks
    try:
        async with locks.for_room(room_id):
            response, to_room = await handler(app=app, room_id=room_id, **kwargs)
            await publish(app=app, room_id=room_id, events=to_room)
    except RoomNotFoundError:
        # unknown ids must not leave a lock behind
        locks.discard(room_id)
        raise
    return response


async def publish(*, app, room_id: str, events: List[OutgoingEvent]) -> None:
    broadcaster = app.state.wsman
    for e in events:
        await broadcaster.broadcast(room_id, dump_event(e))
