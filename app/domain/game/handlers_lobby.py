from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from app.domain.common.turns import settle_turn
from app.domain.common.validation import ensure_master
from app.domain.room.results import PlayerInfo, RoomSummary, player_info, room_to_summary
from app.transport.protocols import (
    InUser,
    OutgoingEvent,
    OutMasterChanged,
    OutNewTurn,
    OutPlayerJoined,
    OutPlayerLeft,
    OutRoomRestarted,
)

logger = logging.getLogger(__name__)

Outgoing = List[OutgoingEvent]


async def handle_create_room(*, app, pid: str, msg: InUser) -> Tuple[RoomSummary, Outgoing]:
    """The creator becomes master and holds the turn so they can set a word."""
    logger.info(f"create-room {pid}")
    registry = app.state.registry
    room = await registry.create_room(pid, msg.name)
    return room_to_summary(room), []


async def handle_get_room(*, app, room_id: str, pid: Optional[str] = None, msg=None) -> Tuple[RoomSummary, Outgoing]:
    room = await app.state.registry.get_room_by_id(room_id)
    return room_to_summary(room), []


async def handle_restart(*, app, room_id: str, pid: Optional[str], msg=None) -> Tuple[RoomSummary, Outgoing]:
    logger.info(f"restart-game {room_id}")
    registry = app.state.registry
    settings = app.state.settings

    room = await registry.get_room_by_id(room_id)
    ensure_master(room, pid)

    previous_master = room.master_id
    room.restart_game(rotate_master=settings.ROTATE_MASTER_ON_RESTART)

    summary = room_to_summary(room)
    events: Outgoing = [OutRoomRestarted(room=summary)]
    if room.master_id != previous_master and room.master_id is not None:
        events.append(OutMasterChanged(player_id=room.master_id))
    return summary, events


async def handle_join(*, app, room_id: str, pid: str, msg: InUser) -> Tuple[PlayerInfo, Outgoing]:
    """
    Join (or rejoin) a room.
    - points carry over only from a record for this same room
    - a master returning in the round they left takes the role back, and the
      turn too while no word is set
    """
    logger.info(f"join {room_id}, {pid}, {msg.name}")
    registry = app.state.registry

    room = await registry.get_room_by_id(room_id)
    existing = room.get_player(pid)
    if existing is not None:
        return player_info(room, existing), []

    returning = await registry.get_returning_player(pid)
    same_room = returning is not None and returning.room_id == room_id
    points = returning.points if same_room else 0

    had_master = room.master_id is not None
    parked_on_master = room.state == "IN_PROGRESS" and room.current_turn == room.master_id

    player = await registry.add_player(room_id, pid, msg.name, points)
    events: Outgoing = [OutPlayerJoined(player=player)]

    if not had_master:
        # joined an empty room
        events.append(OutMasterChanged(player_id=pid))
        events.append(OutNewTurn(player_id=room.current_turn))
    elif same_room and returning.was_master and room.round == returning.round:
        await registry.update_master(room_id, pid)
        events.append(OutMasterChanged(player_id=pid))
        if not room.current_word:
            room.give_turn_to_master()
            events.append(OutNewTurn(player_id=pid))
    elif parked_on_master:
        events.append(OutNewTurn(player_id=room.update_next_turn()))

    return player_info(room, room.require_player(pid)), events


async def handle_leave(*, app, room_id: str, pid: str, save: bool = False) -> Tuple[PlayerInfo, Outgoing]:
    """
    Remove a player. A leaving master is replaced by the next player in join
    order; a leaving turn holder passes the turn on in the same call.
    """
    logger.info(f"leave {room_id}, {pid}, save={save}")
    registry = app.state.registry

    removed = await registry.remove_player(room_id, pid, save=save)
    room = await registry.get_room_by_id(room_id)
    events: Outgoing = [OutPlayerLeft(player=removed.player)]

    if not room.players:
        return removed.player, events

    new_master_in_turn = False
    if removed.was_master:
        events.append(OutMasterChanged(player_id=room.master_id))
        new_master_in_turn = room.state == "IN_PROGRESS" and room.current_turn == room.master_id

    if removed.was_in_turn or new_master_in_turn:
        events.append(OutNewTurn(player_id=settle_turn(room)))

    return removed.player, events


async def handle_disconnect(*, app, room_id: str, pid: Optional[str]) -> Tuple[Optional[PlayerInfo], Outgoing]:
    """
    Called by transport when a subscribed player's socket closes.
    Same as leave, but keeps a returning-player record for a later rejoin.
    """
    if not pid:
        return None, []

    registry = app.state.registry
    room = registry.find_room(room_id)
    if room is None or room.get_player(pid) is None:
        return None, []
    return await handle_leave(app=app, room_id=room_id, pid=pid, save=True)
