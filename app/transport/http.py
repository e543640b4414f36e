from __future__ import annotations

from fastapi import APIRouter, Header, Request

from app.domain.game.handlers import (
    handle_create_room,
    handle_get_room,
    handle_join,
    handle_leave,
    handle_new_guess,
    handle_restart,
    handle_set_word,
    handle_word_guess,
)
from app.domain.room.results import GuessInfo, PlayerInfo, RoomSummary, WordGuessInfo
from app.transport.dispatcher import publish, run_in_room
from app.transport.protocols import InGuess, InSetWord, InUser, InWordGuess

router = APIRouter(prefix="/game", tags=["game"])


@router.post("/rooms", response_model=RoomSummary)
async def create_room(body: InUser, request: Request, player_id: str = Header(alias="player-id")):
    summary, to_room = await handle_create_room(app=request.app, pid=player_id, msg=body)
    await publish(app=request.app, room_id=summary.id, events=to_room)
    return summary


@router.get("/rooms/{room_id}", response_model=RoomSummary)
async def get_room(room_id: str, request: Request):
    return await run_in_room(app=request.app, room_id=room_id, handler=handle_get_room)


@router.put("/rooms/{room_id}/restart-game", response_model=RoomSummary)
async def restart_game(room_id: str, request: Request, player_id: str = Header(alias="player-id")):
    return await run_in_room(app=request.app, room_id=room_id, handler=handle_restart, pid=player_id)


@router.post("/rooms/{room_id}/players", response_model=PlayerInfo)
async def join_room(room_id: str, body: InUser, request: Request, player_id: str = Header(alias="player-id")):
    return await run_in_room(app=request.app, room_id=room_id, handler=handle_join, pid=player_id, msg=body)


@router.delete("/rooms/{room_id}/players/{leaving_id}", response_model=PlayerInfo)
async def remove_player(room_id: str, leaving_id: str, request: Request):
    return await run_in_room(app=request.app, room_id=room_id, handler=handle_leave, pid=leaving_id, save=False)


@router.post("/rooms/{room_id}/word", response_model=InSetWord)
async def set_word(room_id: str, body: InSetWord, request: Request, player_id: str = Header(alias="player-id")):
    word = await run_in_room(app=request.app, room_id=room_id, handler=handle_set_word, pid=player_id, msg=body)
    return InSetWord(word=word)


@router.post("/rooms/{room_id}/guesses", response_model=GuessInfo)
async def new_guess(room_id: str, body: InGuess, request: Request, player_id: str = Header(alias="player-id")):
    return await run_in_room(app=request.app, room_id=room_id, handler=handle_new_guess, pid=player_id, msg=body)


@router.post("/rooms/{room_id}/word-guesses", response_model=WordGuessInfo)
async def new_word_guess(room_id: str, body: InWordGuess, request: Request, player_id: str = Header(alias="player-id")):
    return await run_in_room(app=request.app, room_id=room_id, handler=handle_word_guess, pid=player_id, msg=body)
