"""Tests for FEN parsing and serialisation."""

import pytest

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, PieceType
from gambit.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from gambit.core.piece import Piece
from gambit.core.types import Square, parse_square


class TestFenParsing:
    def test_starting_position(self) -> None:
        assert board_from_fen(STARTING_FEN) == Board.initial()

    def test_side_and_flags(self) -> None:
        board = board_from_fen("4k3/8/8/8/4P3/8/8/4K3 b K e3 5 12")
        assert board.side_to_move == Color.BLACK
        assert board.castling == CastlingRights.WHITE_KINGSIDE
        assert board.en_passant == parse_square("e3")
        assert board.halfmove_clock == 5
        assert board.fullmove_number == 12

    def test_clocks_optional(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3 w - -")
        assert board.halfmove_clock == 0
        assert board.fullmove_number == 1

    def test_wide_board(self) -> None:
        board = board_from_fen("5k4/10/10/10/10/10/10/5K4 w - - 0 1")
        assert (board.width, board.height) == (10, 8)
        assert board[Square(5, 0)] == Piece(Color.WHITE, PieceType.KING)

    def test_invalid_field_count_raises(self) -> None:
        with pytest.raises(ValueError):
            board_from_fen("invalid")

    def test_invalid_side_to_move_raises(self) -> None:
        with pytest.raises(ValueError, match="side-to-move"):
            board_from_fen("8/8/8/8/8/8/8/8 x - - 0 1")

    def test_ragged_ranks_raise(self) -> None:
        with pytest.raises(ValueError, match="rank width"):
            board_from_fen("9/8/8/8/8/8/8/8 w - - 0 1")

    def test_invalid_castling_field_raises(self) -> None:
        with pytest.raises(ValueError, match="castling"):
            board_from_fen("8/8/8/8/8/8/8/8 w Kx - 0 1")

    def test_invalid_en_passant_for_side_raises(self) -> None:
        with pytest.raises(ValueError, match="en-passant"):
            board_from_fen("8/8/8/8/8/8/8/8 w - e3 0 1")

    def test_invalid_piece_raises(self) -> None:
        with pytest.raises(ValueError):
            board_from_fen("7z/8/8/8/8/8/8/8 w - - 0 1")


class TestFenSerialisation:
    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "8/8/4k3/8/8/4K3/8/8 w - - 0 1",
            "5k4/10/10/10/10/10/10/5K4 w - - 0 1",
        ],
    )
    def test_roundtrip(self, fen: str) -> None:
        assert board_to_fen(board_from_fen(fen)) == fen

    def test_after_move(self) -> None:
        board = Board.initial()
        move = next(m for m in board.moves(parse_square("e2")) if m.to_sq == parse_square("e4"))
        board.move(move)
        assert board_to_fen(board) == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )
