# app/store/registry.py
from __future__ import annotations

import logging
import random
import string
from dataclasses import dataclass
from typing import Dict, List, Optional

from app.domain.common.errors import RoomNotFoundError
from app.domain.room.entity import Room
from app.domain.room.results import FinishState, PlayerInfo, player_info
from app.store.models import PlayerStore, ReturningPlayerRecord
from app.store.sessions import MemorySessionStore, SessionStore
from app.util.timeutil import now_ts

logger = logging.getLogger(__name__)


def _gen_room_code(n: int = 6) -> str:
    alphabet = string.ascii_uppercase + string.digits
    return "".join(random.choice(alphabet) for _ in range(n))


@dataclass
class RemovedPlayer:
    player: PlayerInfo
    position: int
    was_master: bool
    was_in_turn: bool


class RoomRegistry:
    """
    Owns every Room by id. Lookups hand out the live instance, so callers
    mutate the room in place and never re-save it.
    """

    def __init__(self, sessions: Optional[SessionStore] = None):
        self._rooms: Dict[str, Room] = {}
        self.sessions: SessionStore = sessions if sessions is not None else MemorySessionStore()

    # ----------------------------
    # Rooms
    # ----------------------------
    async def create_room(self, master_user_id: str, master_name: str) -> Room:
        ts = now_ts()
        code = _gen_room_code()
        while code in self._rooms:
            logger.warning(f"Room code collision detected, regenerating: {code}")
            code = _gen_room_code()

        master = PlayerStore(pid=master_user_id, name=master_name, points=0, joined_at=ts)
        room = Room(code, master, created_at=ts)
        self._rooms[code] = room
        logger.info(f"Created room {code} with master {master_user_id}")
        return room

    async def get_room_by_id(self, room_id: str) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return room

    def find_room(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    async def list_rooms(self) -> List[Room]:
        return list(self._rooms.values())

    # ----------------------------
    # Players
    # ----------------------------
    async def add_player(self, room_id: str, user_id: str, name: str, initial_points: int = 0) -> PlayerInfo:
        room = await self.get_room_by_id(room_id)
        player = room.add_player(
            PlayerStore(pid=user_id, name=name, points=max(0, initial_points), joined_at=now_ts())
        )
        return player_info(room, player)

    async def remove_player(self, room_id: str, player_id: str, *, save: bool) -> RemovedPlayer:
        """
        Remove a player from turn order. With save, snapshot them for a later
        rejoin. Always returns what the player looked like on the way out.
        """
        room = await self.get_room_by_id(room_id)
        was_master = room.master_id == player_id
        was_in_turn = room.current_turn == player_id
        player, position = room.remove_player(player_id)

        if save:
            await self.sessions.put(
                ReturningPlayerRecord(
                    user_id=player.pid,
                    room_id=room.id,
                    round=room.round,
                    was_master=was_master,
                    points=player.points,
                    name=player.name,
                    left_at=now_ts(),
                )
            )

        info = PlayerInfo(id=player.pid, name=player.name, points=player.points, is_master=was_master)
        return RemovedPlayer(player=info, position=position, was_master=was_master, was_in_turn=was_in_turn)

    async def get_returning_player(self, user_id: str) -> Optional[ReturningPlayerRecord]:
        return await self.sessions.get(user_id)

    async def update_master(self, room_id: str, player_id: str) -> Optional[str]:
        room = await self.get_room_by_id(room_id)
        previous = room.set_master(player_id)
        logger.info(f"Room {room_id} master {previous} -> {player_id}")
        return previous

    # ----------------------------
    # Queries
    # ----------------------------
    async def is_player_in_turn(self, room_id: str, player_id: str) -> bool:
        room = await self.get_room_by_id(room_id)
        return room.current_turn == player_id

    async def check_game_finished(self, room_id: str) -> Optional[FinishState]:
        """
        FinishState the first time a completed word is seen, None afterwards.
        The credited player's standing is saved to the session history.
        """
        room = await self.get_room_by_id(room_id)
        finished = room.take_finish()
        if finished is None:
            return None

        credited_pid, reason = finished
        credited = room.get_player(credited_pid) if credited_pid else None
        if credited is not None:
            await self.sessions.put(
                ReturningPlayerRecord(
                    user_id=credited.pid,
                    room_id=room.id,
                    round=room.round,
                    was_master=room.master_id == credited.pid,
                    points=credited.points,
                    name=credited.name,
                    left_at=now_ts(),
                )
            )
        return FinishState(
            player=player_info(room, credited) if credited is not None else None,
            reason=reason,
            word=room.word,
        )
