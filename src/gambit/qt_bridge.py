"""Qt bridge delivering game notifications to the GUI thread.

``Game`` calls its listeners on whichever thread changed the game, which is
often the turn worker.  :class:`QtGameListener` turns each call into a Qt
signal carrying an immutable snapshot; connect it to GUI slots and Qt
queues delivery onto the receiver's thread.
"""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from gambit.game.controller import Game, GameSnapshot


class QtGameListener(QObject):
    """Game listener that re-emits events as Qt signals."""

    game_changed = pyqtSignal(object)  # GameSnapshot
    game_finished = pyqtSignal(object)  # winning Color, or None for a draw

    def __init__(self, game: Game | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._game: Game | None = None
        self._finished_emitted = False
        if game is not None:
            self.attach(game)

    @property
    def game(self) -> Game | None:
        return self._game

    def attach(self, game: Game) -> None:
        """Start listening to *game* (detaching from any previous one)."""
        self.detach()
        self._game = game
        self._finished_emitted = game.done
        game.add_listener(self)

    def detach(self) -> None:
        if self._game is not None:
            self._game.remove_listener(self)
            self._game = None

    def on_game_event(self, game: Game) -> None:
        snapshot: GameSnapshot = game.snapshot()
        self.game_changed.emit(snapshot)
        if not snapshot.done:
            self._finished_emitted = False
        elif not self._finished_emitted:
            self._finished_emitted = True
            self.game_finished.emit(snapshot.winner)
