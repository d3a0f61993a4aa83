"""Abstract interfaces for the game layer.

The orchestrator depends on these, not on concrete players or UI code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.enums import Color
    from gambit.core.move import Move
    from gambit.game.controller import Game


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    WHITE_TURN = auto()
    BLACK_TURN = auto()
    DONE = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or computer)."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def set_game(self, game: Game) -> None:
        """Back-reference for reporting status and progress, not for mutation."""

    @abstractmethod
    def set_board(self, board: Board) -> None:
        """Receive a board copy to display.

        Also withdraws any turn still pending for this player (after an
        undo, or once the game is over).
        """

    @abstractmethod
    def set_active(self, board: Board, color: Color) -> Move | None:
        """It is *color*'s turn on *board* (a private copy).

        Runs on the game's worker thread.  Return the chosen move, or None
        when the move will arrive later through ``Game.move``.
        ``game.turn_generation`` identifies this turn while the call runs.
        """


class GameListener(Protocol):
    """Observer notified after every status, progress or completion change."""

    def on_game_event(self, game: Game) -> None: ...
