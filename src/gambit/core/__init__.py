"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from gambit.core import Board, Color

    board = Board.initial()
    for move in board.moves(Color.WHITE):
        print(move)
"""

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from gambit.core.piece import Piece
from gambit.core.types import Square, parse_square, square_name

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "Square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
