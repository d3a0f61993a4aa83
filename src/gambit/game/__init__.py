"""Game management layer — orchestrator, players, listener interfaces.

Quick start::

    from gambit.core import Board
    from gambit.game import ComputerPlayer, Game, HumanPlayer

    human = HumanPlayer("Alice")
    game = Game(Board.initial(), human, ComputerPlayer())
    game.begin()

Listeners run on the turn worker thread.  Qt hosts should attach a
:class:`gambit.qt_bridge.QtGameListener` and connect to its signals, which
deliver snapshots on the GUI thread::

    from gambit.qt_bridge import QtGameListener

    bridge = QtGameListener(game)
    bridge.game_changed.connect(window.show_snapshot)
"""

from gambit.game.controller import Game, GameSnapshot
from gambit.game.interfaces import GameListener, GamePhase, IPlayer
from gambit.game.player import ComputerPlayer, HumanPlayer, IllegalMoveError

__all__ = [
    # Interfaces
    "GameListener",
    "GamePhase",
    "IPlayer",
    # Concrete
    "ComputerPlayer",
    "Game",
    "GameSnapshot",
    "HumanPlayer",
    "IllegalMoveError",
]
