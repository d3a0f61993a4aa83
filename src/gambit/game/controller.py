"""Game — the orchestrator that drives a chess game between two players.

Turn alternation: the player on move is handed a copy of the board on a
single worker thread, so the caller (usually a UI) never blocks on a search.
Every dispatched turn carries a generation number; a move that comes back
for an outdated generation (after an undo or :meth:`Game.end`) is dropped.
Listeners are notified synchronously on whichever thread made the change.
"""

from __future__ import annotations

import logging
import threading
import weakref
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from gambit.core.board import Board
from gambit.core.enums import Color
from gambit.core.move import Move
from gambit.game.interfaces import GameListener, GamePhase, IPlayer

_LOGGER = logging.getLogger(__name__)

_TURN_PHASES: dict[Color, GamePhase] = {
    Color.WHITE: GamePhase.WHITE_TURN,
    Color.BLACK: GamePhase.BLACK_TURN,
}
_TURN_STATUS: dict[Color, str] = {
    Color.WHITE: "White's turn.",
    Color.BLACK: "Black's turn.",
}
_WIN_STATUS: dict[Color, str] = {
    Color.WHITE: "White wins!",
    Color.BLACK: "Black wins!",
}
STALEMATE_STATUS = "Stalemate!"
ENDED_STATUS = "Game ended."

Listener = GameListener | Callable[["Game"], Any]


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Read-only copy of the observable game state."""

    phase: GamePhase
    turn: Color | None
    status: str
    progress: float
    done: bool
    winner: Color | None
    board: Board


class Game:
    """Drives a game of chess, given a board and two players.

    The game owns its board: players and listeners only ever see copies,
    and the board changes only through :meth:`move` and :meth:`undo`.
    """

    __slots__ = (
        "_board",
        "_players",
        "_turn",
        "_phase",
        "_status",
        "_progress",
        "_done",
        "_winner",
        "_listeners",
        "_lock",
        "_executor",
        "_generation",
        "_turn_generation",
        "_finished",
    )

    def __init__(self, board: Board, white: IPlayer, black: IPlayer) -> None:
        self._board = board
        self._players: dict[Color, IPlayer] = {Color.WHITE: white, Color.BLACK: black}
        self._turn: Color | None = None
        self._phase = GamePhase.NOT_STARTED
        self._status = ""
        self._progress = 0.0
        self._done = False
        self._winner: Color | None = None
        self._listeners: list[weakref.ref[Any]] = []
        self._lock = threading.RLock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="gambit-turn")
        self._generation = 0
        self._turn_generation = 0
        self._finished = threading.Event()
        white.set_game(self)
        black.set_game(self)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def turn(self) -> Color | None:
        """Side to move, or None before :meth:`begin`."""
        return self._turn

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def status(self) -> str:
        return self._status

    @property
    def progress(self) -> float:
        """Progress of the current computer search (0.0-1.0)."""
        return self._progress

    @property
    def done(self) -> bool:
        return self._done

    @property
    def winner(self) -> Color | None:
        """Winning side once done; None for a draw or an ended game."""
        return self._winner

    @property
    def generation(self) -> int:
        """Counter bumped whenever a turn is dispatched or abandoned."""
        return self._generation

    @property
    def turn_generation(self) -> int:
        """Generation of the turn the worker is currently handing out.

        Read it from inside ``IPlayer.set_active`` to tie later calls to
        :meth:`is_current` and :meth:`report_progress` to that turn.
        """
        return self._turn_generation

    def is_current(self, generation: int) -> bool:
        """Whether the turn dispatched as *generation* is still being played."""
        return not self._done and generation == self._generation

    def player(self, color: Color) -> IPlayer:
        return self._players[color]

    @property
    def board(self) -> Board:
        """Copy of the current board; changing it does not affect the game."""
        return self.board_snapshot()

    def board_snapshot(self) -> Board:
        """Copy of the current board."""
        with self._lock:
            return self._board.copy()

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            return GameSnapshot(
                phase=self._phase,
                turn=self._turn,
                status=self._status,
                progress=self._progress,
                done=self._done,
                winner=self._winner,
                board=self._board.copy(),
            )

    # ── Lifecycle ────────────────────────────────────────────────────────

    def begin(self) -> None:
        """Start (or restart) turn alternation from the board's side to move."""
        with self._lock:
            self._done = False
            self._winner = None
            self._finished.clear()
            self._turn = self._board.side_to_move
            self._phase = _TURN_PHASES[self._turn]
            self._share_board()
            self._call_listeners()
            if self._done or self._finish_if_over(self._turn):
                return
            self._dispatch()

    def move(self, move: Move) -> None:
        """Apply a move for the side to move, then finish or switch turns.

        The move must come from ``Board.moves``.  Ignored once the game is
        done.
        """
        with self._lock:
            if self._done:
                return
            self._board.move(move)
            opponent = self._board.side_to_move
            if self._finish_if_over(opponent):
                return
            self._turn = opponent
            self._phase = _TURN_PHASES[opponent]
            self._call_listeners()
            if not self._done:
                self._dispatch()

    def undo(self) -> bool:
        """Take back the last move and hand the turn back to its player.

        Any search still running for the abandoned turn is cancelled and its
        result discarded.  Returns False when there is nothing to undo.
        """
        with self._lock:
            if self._board.undo() is None:
                return False
            self._turn = self._board.side_to_move
            if self._phase == GamePhase.NOT_STARTED:
                self._call_listeners()
                return True
            self._done = False
            self._winner = None
            self._finished.clear()
            self._phase = _TURN_PHASES[self._turn]
            self._share_board()
            self._dispatch()
            return True

    def end(self, status: str = ENDED_STATUS) -> None:
        """Stop the running game without a winner."""
        with self._lock:
            self._generation += 1
            self._winner = None
            self._done = True
            self._phase = GamePhase.DONE
            self._progress = 0.0
            self._share_board()
            try:
                self.set_status(status)
            finally:
                self._finished.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the game is done; False if *timeout* expired first."""
        return self._finished.wait(timeout)

    def close(self) -> None:
        """End the game if still running and stop the worker thread."""
        with self._lock:
            if not self._done and self._phase != GamePhase.NOT_STARTED:
                self.end()
        self._executor.shutdown(wait=True, cancel_futures=True)

    def __enter__(self) -> Game:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── Observable fields ────────────────────────────────────────────────

    def set_status(self, message: str) -> None:
        """Set the status message and notify listeners."""
        if message is None:
            raise TypeError("Status message must not be None")
        _LOGGER.info("status: %s", message)
        with self._lock:
            self._status = message
            self._call_listeners()

    def set_progress(self, value: float) -> None:
        """Set search progress (0.0-1.0) and notify listeners."""
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"Progress must be within [0, 1], got {value}")
        _LOGGER.debug("progress: %.3f", value)
        with self._lock:
            self._progress = value
            self._call_listeners()

    def report_progress(self, generation: int, value: float) -> None:
        """Like :meth:`set_progress`, but ignored once *generation* is stale."""
        with self._lock:
            if self.is_current(generation):
                self.set_progress(value)

    # ── Listeners ────────────────────────────────────────────────────────

    def add_listener(self, listener: Listener) -> None:
        """Register *listener* without taking ownership of it.

        Accepts a :class:`GameListener` or a callable taking the game.  Only
        a weak reference is kept; keep the listener alive yourself.
        """
        ref: weakref.ref[Any]
        if hasattr(listener, "__self__") and hasattr(listener, "__func__"):
            ref = weakref.WeakMethod(listener)  # type: ignore[arg-type]
        else:
            ref = weakref.ref(listener)
        with self._lock:
            self._listeners.append(ref)

    def remove_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners = [
                ref for ref in self._listeners if ref() not in (None, listener)
            ]

    def _call_listeners(self) -> None:
        for ref in list(self._listeners):
            target = ref()
            if target is None:
                continue
            if hasattr(target, "on_game_event"):
                target.on_game_event(self)
            else:
                target(self)
        self._listeners = [ref for ref in self._listeners if ref() is not None]

    # ── Internal helpers ─────────────────────────────────────────────────

    def _finish_if_over(self, side: Color) -> bool:
        """Finish the game if *side*, about to move, has no legal moves."""
        if self._board.checkmate(side):
            self._winner = side.opposite
            status = _WIN_STATUS[side.opposite]
        elif self._board.stalemate(side):
            self._winner = None
            status = STALEMATE_STATUS
        else:
            return False

        self._generation += 1
        self.set_status(status)
        self.set_progress(0.0)
        self._done = True
        self._phase = GamePhase.DONE
        self._share_board()
        self._call_listeners()
        self._finished.set()
        return True

    def _share_board(self) -> None:
        """Give every player a fresh copy, withdrawing any pending turn."""
        for player in self._players.values():
            player.set_board(self._board.copy())

    def _dispatch(self) -> None:
        """Hand the turn to the player on move, on the worker thread."""
        assert self._turn is not None
        self._generation += 1
        generation = self._generation
        side = self._turn
        self.set_status(_TURN_STATUS[side])
        self.set_progress(0.0)
        if generation != self._generation:
            return  # a listener ended the game or took the turn elsewhere
        self._executor.submit(self._run_turn, generation, self._board.copy(), side)

    def _run_turn(self, generation: int, board: Board, side: Color) -> None:
        with self._lock:
            if not self.is_current(generation):
                _LOGGER.debug("Skipping abandoned turn %d", generation)
                return
            self._turn_generation = generation

        player = self._players[side]
        try:
            move = player.set_active(board, side)
        except Exception as exc:
            _LOGGER.exception("%s player %r failed to move", side, player.name)
            with self._lock:
                if self.is_current(generation):
                    self.end(f"{side.name.title()} player failed: {exc}")
            raise

        if move is None:
            return  # the player delivers its move later through move()
        with self._lock:
            if not self.is_current(generation):
                _LOGGER.debug("Discarding %s from abandoned turn %d", move, generation)
                return
            try:
                self.move(move)
            except Exception as exc:
                _LOGGER.exception("Could not apply %s for %s", move, side)
                if not self._done:
                    self.end(f"Could not apply {move}: {exc}")
                raise
