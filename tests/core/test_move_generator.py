"""Move generation tests, including perft counts against known positions."""

import pytest

from conftest import perft
from gambit.core.board import Board
from gambit.core.enums import Color
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import board_from_fen
from gambit.core.types import parse_square

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"
POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"
POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


class TestPerftStart:
    def test_depth_1(self) -> None:
        assert perft(Board.initial(), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(Board.initial(), 2) == 400

    def test_depth_3(self) -> None:
        assert perft(Board.initial(), 3) == 8902

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        assert perft(Board.initial(), 4) == 197281


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(board_from_fen(KIWIPETE), 1) == 48

    def test_depth_2(self) -> None:
        assert perft(board_from_fen(KIWIPETE), 2) == 2039

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(board_from_fen(KIWIPETE), 3) == 97862


class TestPerftOther:
    def test_pos3(self) -> None:
        board = board_from_fen(POS3)
        assert perft(board, 1) == 14
        assert perft(board, 2) == 191
        assert perft(board, 3) == 2812

    def test_pos4(self) -> None:
        board = board_from_fen(POS4)
        assert perft(board, 1) == 6
        assert perft(board, 2) == 264

    def test_pos5(self) -> None:
        board = board_from_fen(POS5)
        assert perft(board, 1) == 44
        assert perft(board, 2) == 1486

    def test_perft_leaves_board_unchanged(self) -> None:
        board = board_from_fen(KIWIPETE)
        before = board.copy()
        perft(board, 2)
        assert board == before


class TestPseudoLegal:
    def test_pinned_piece_is_filtered(self) -> None:
        board = board_from_fen("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        bishop = parse_square("e2")
        assert list(MoveGenerator(board).pseudo_legal_moves(bishop))
        assert list(board.moves(bishop)) == []

    def test_check_evasions(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        targets = {m.to_sq for m in board.moves(Color.WHITE)}
        assert targets == {parse_square(n) for n in ("d2", "e2", "f2")}

    def test_square_attacked(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert gen.is_square_attacked(parse_square("f3"), Color.WHITE)
        assert gen.is_square_attacked(parse_square("d6"), Color.BLACK)
        assert not gen.is_square_attacked(parse_square("e4"), Color.WHITE)

    def test_moves_are_lazy(self) -> None:
        board = Board.initial()
        first = next(board.moves(Color.WHITE))
        assert first in set(board.moves(Color.WHITE))
