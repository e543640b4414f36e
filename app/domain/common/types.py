# app/domain/common/types.py
from __future__ import annotations

from typing import Literal

RoomState = Literal["AWAITING_WORD", "IN_PROGRESS", "FINISHED"]
FinishReason = Literal["WORD_REVEALED", "WORD_GUESSED"]
