"""gambit — chess rules, minimax search and a threaded game orchestrator.

Subpackages: :mod:`gambit.core` (board and rules), :mod:`gambit.engine`
(search), :mod:`gambit.game` (players and the game loop).  GUI hosts get
notifications on their own thread through :mod:`gambit.qt_bridge`.
"""

__version__ = "0.1.0"
