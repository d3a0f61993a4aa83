"""Static position evaluation."""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.move_generator import MoveGenerator
from gambit.core.types import Square
from gambit.engine.config import EngineConfig


class Evaluator:
    """Material, piece-square and mobility heuristic.

    Scores are centipawns from *color*'s point of view and are symmetric:
    ``evaluate(board, WHITE) == -evaluate(board, BLACK)``.
    """

    __slots__ = ("_config",)

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or EngineConfig()

    def evaluate(self, board: Board, color: Color) -> int:
        config = self._config
        material = 0
        position = 0.0
        for sq in board.squares():
            piece = board[sq]
            if piece is None:
                continue
            sign = 1 if piece.color == Color.WHITE else -1
            material += sign * config.piece_values[piece.piece_type]
            position += sign * piece_square_bonus(
                piece.piece_type, piece.color, sq, board.width, board.height
            )

        score = config.material_weight * material + config.position_weight * position
        if config.mobility_weight:
            gen = MoveGenerator(board)
            mobility = sum(1 for _ in gen.pseudo_legal_moves_for(Color.WHITE)) - sum(
                1 for _ in gen.pseudo_legal_moves_for(Color.BLACK)
            )
            score += config.mobility_weight * mobility

        white_score = round(score)
        return white_score if color == Color.WHITE else -white_score

    def piece_value(self, piece_type: PieceType) -> int:
        return self._config.piece_values[piece_type]


def piece_square_bonus(
    piece_type: PieceType,
    color: Color,
    sq: Square,
    width: int = 8,
    height: int = 8,
) -> float:
    """Positional bonus for a piece, mirrored so both colors score alike."""
    file_idx = sq.file
    rank_idx = sq.rank if color == Color.WHITE else height - 1 - sq.rank
    center_file = (width - 1) / 2
    center_rank = (height - 1) / 2
    center_dist = abs(file_idx - center_file) + abs(rank_idx - center_rank)

    if piece_type == PieceType.PAWN:
        return rank_idx * 12 - abs(file_idx - center_file) * 2
    if piece_type == PieceType.KNIGHT:
        return 28 - center_dist * 8
    if piece_type == PieceType.BISHOP:
        return 22 - center_dist * 5 + rank_idx * 2
    if piece_type == PieceType.ROOK:
        return 10 + rank_idx * 3 - abs(file_idx - center_file)
    if piece_type == PieceType.QUEEN:
        return 6 - center_dist * 2

    # King: favor the home ranks near the castled files.
    if rank_idx <= 1:
        return 18 - abs(file_idx - width // 2) * 2
    return -rank_idx * 8
