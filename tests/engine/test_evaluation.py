"""Tests for the static evaluator."""

import pytest

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.notation import board_from_fen
from gambit.engine.config import EngineConfig
from gambit.engine.evaluation import Evaluator, piece_square_bonus
from gambit.core.types import parse_square

POSITIONS = [
    "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
    "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
    "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
    "4k3/8/8/8/8/8/8/3QK3 w - - 0 1",
]


class TestEvaluator:
    def test_starting_position_is_balanced(self) -> None:
        assert Evaluator().evaluate(Board.initial(), Color.WHITE) == 0

    @pytest.mark.parametrize("fen", POSITIONS)
    @pytest.mark.parametrize("config", [EngineConfig.default(), EngineConfig.strong()])
    def test_symmetric(self, fen: str, config: EngineConfig) -> None:
        board = board_from_fen(fen)
        evaluator = Evaluator(config)
        assert evaluator.evaluate(board, Color.WHITE) == -evaluator.evaluate(board, Color.BLACK)

    def test_extra_queen_is_winning(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/3QK3 w - - 0 1")
        assert Evaluator().evaluate(board, Color.WHITE) > 800
        assert Evaluator().evaluate(board, Color.BLACK) < -800

    def test_material_weight_scales(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/3QK3 w - - 0 1")
        base = EngineConfig(position_weight=0.0)
        doubled = EngineConfig(position_weight=0.0, material_weight=2.0)
        assert Evaluator(doubled).evaluate(board, Color.WHITE) == 2 * Evaluator(base).evaluate(
            board, Color.WHITE
        )

    def test_piece_value(self) -> None:
        assert Evaluator().piece_value(PieceType.ROOK) == 500


class TestPieceSquareBonus:
    def test_mirrored_between_colors(self) -> None:
        white = piece_square_bonus(PieceType.KNIGHT, Color.WHITE, parse_square("c3"))
        black = piece_square_bonus(PieceType.KNIGHT, Color.BLACK, parse_square("c6"))
        assert white == black

    def test_advanced_pawn_scores_higher(self) -> None:
        low = piece_square_bonus(PieceType.PAWN, Color.WHITE, parse_square("e2"))
        high = piece_square_bonus(PieceType.PAWN, Color.WHITE, parse_square("e6"))
        assert high > low

    def test_centre_knight_beats_rim(self) -> None:
        centre = piece_square_bonus(PieceType.KNIGHT, Color.WHITE, parse_square("d4"))
        rim = piece_square_bonus(PieceType.KNIGHT, Color.WHITE, parse_square("a1"))
        assert centre > rim
