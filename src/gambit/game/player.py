"""Concrete player implementations."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from gambit.core.enums import Color
from gambit.core.move import Move
from gambit.engine.minimax import MinimaxEngine
from gambit.game.interfaces import IPlayer

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.engine.search import IEngine
    from gambit.game.controller import Game

_LOGGER = logging.getLogger(__name__)


class IllegalMoveError(ValueError):
    """Raised when a submitted move is not legal in the current position."""


class HumanPlayer(IPlayer):
    """A human participant — moves come from the UI via :meth:`submit`.

    ``set_active`` only records the position and returns at once, so the
    game's worker thread is never held waiting for input.
    """

    __slots__ = ("_name", "_game", "_board", "_active_color", "_lock")

    def __init__(self, name: str = "") -> None:
        self._name = name or "Player"
        self._game: Game | None = None
        self._board: Board | None = None
        self._active_color: Color | None = None
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    @property
    def board(self) -> Board | None:
        """Latest board copy received from the game."""
        return self._board

    @property
    def active_color(self) -> Color | None:
        """Color this player must move now, or None when waiting."""
        return self._active_color

    def set_game(self, game: Game) -> None:
        self._game = game

    def set_board(self, board: Board) -> None:
        with self._lock:
            self._board = board
            self._active_color = None

    def set_active(self, board: Board, color: Color) -> Move | None:
        with self._lock:
            self._board = board
            self._active_color = color
        return None

    def submit(self, move: Move) -> Move:
        """Play *move* for the active color and return the legal move used.

        Only the squares and promotion piece are compared, so a move built
        from user input without a special-move flag is accepted.
        """
        with self._lock:
            board, color = self._board, self._active_color
            if board is None or color is None:
                raise IllegalMoveError(f"{self._name} is not on move")
            piece = board[move.from_sq]
            if piece is None or piece.color != color:
                raise IllegalMoveError(f"Illegal move: {move}")
            legal = next(
                (
                    m
                    for m in board.moves(move.from_sq)
                    if m.to_sq == move.to_sq and m.promotion == move.promotion
                ),
                None,
            )
            if legal is None:
                raise IllegalMoveError(f"Illegal move: {move}")
            self._active_color = None

        if self._game is not None:
            self._game.move(legal)
        return legal


class ComputerPlayer(IPlayer):
    """A computer participant that searches for its move on the worker thread.

    Search progress is forwarded to ``Game.report_progress`` for the turn
    being played.  The search is abandoned cooperatively once that turn is
    no longer current (the game ended or an undo moved on).
    """

    __slots__ = ("_name", "_engine", "_game", "_board")

    def __init__(self, engine: IEngine | None = None, name: str = "Computer") -> None:
        self._name = name
        self._engine = engine or MinimaxEngine()
        self._game: Game | None = None
        self._board: Board | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    def set_game(self, game: Game) -> None:
        self._game = game

    def set_board(self, board: Board) -> None:
        self._board = board

    def set_active(self, board: Board, color: Color) -> Move | None:
        game = self._game
        self._board = board
        if game is None:
            return self._engine.search(board, color).best_move

        generation = game.turn_generation

        def is_cancelled() -> bool:
            return not game.is_current(generation)

        def on_progress(value: float) -> None:
            game.report_progress(generation, value)

        result = self._engine.search(
            board,
            color,
            on_progress=on_progress,
            is_cancelled=is_cancelled,
        )
        _LOGGER.info(
            "%s (%s) chose %s: score=%d depth=%d nodes=%d",
            self._name,
            color,
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )
        return result.best_move
