"""Pseudo-legal move generation and attack detection."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from gambit.core.enums import CastlingRights, Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece, promotion_rank
from gambit.core.types import Square

if TYPE_CHECKING:
    from gambit.core.board import Board


PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

_DIAGONAL_SLIDERS = (PieceType.BISHOP, PieceType.QUEEN)
_STRAIGHT_SLIDERS = (PieceType.ROOK, PieceType.QUEEN)


class MoveGenerator:
    """Generates pseudo-legal moves for a :class:`~gambit.core.board.Board`.

    Pseudo-legal moves respect piece geometry and occupancy but may leave the
    mover's own king attacked; :meth:`Board.moves` filters those out.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(self, sq: Square) -> Iterator[Move]:
        """Pseudo-legal moves for the piece on *sq* (nothing if empty)."""
        piece = self._board[sq]
        if piece is None:
            return
        if piece.piece_type == PieceType.PAWN:
            yield from self._gen_pawn(sq, piece)
            return
        yield from self._gen_rays(sq, piece)
        if piece.piece_type == PieceType.KING:
            yield from self._gen_castling(sq, piece.color)

    def pseudo_legal_moves_for(self, color: Color) -> Iterator[Move]:
        """Pseudo-legal moves for every piece of *color*."""
        for sq in self._board.pieces(color):
            yield from self.pseudo_legal_moves(sq)

    # -- Attack detection ----------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?

        Looks outward from *sq* using each piece type's own geometry: a
        knight on a knight-hop away attacks it, and so on.  Pawn attackers
        are found with the opposite color's capture diagonals.
        """
        board = self._board
        width, height = board.width, board.height

        for attacker in Piece(by_color.opposite, PieceType.PAWN).attacks(
            sq, width, height
        ):
            if board[attacker] == Piece(by_color, PieceType.PAWN):
                return True

        for ptype in (PieceType.KNIGHT, PieceType.KING):
            target = Piece(by_color, ptype)
            for ray in target.rays(sq, width, height):
                if board[ray[0]] == target:
                    return True

        for ptype, sliders in (
            (PieceType.BISHOP, _DIAGONAL_SLIDERS),
            (PieceType.ROOK, _STRAIGHT_SLIDERS),
        ):
            for ray in Piece(by_color, ptype).rays(sq, width, height):
                for to_sq in ray:
                    piece = board[to_sq]
                    if piece is None:
                        continue
                    if piece.color == by_color and piece.piece_type in sliders:
                        return True
                    break

        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_rays(self, sq: Square, piece: Piece) -> Iterator[Move]:
        board = self._board
        for ray in piece.rays(sq, board.width, board.height):
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    yield Move(sq, to_sq)
                    continue
                if target.color != piece.color:
                    yield Move(sq, to_sq)
                break

    def _gen_pawn(self, sq: Square, piece: Piece) -> Iterator[Move]:
        board = self._board
        color = piece.color
        last_rank = promotion_rank(color, board.height)

        rays = piece.rays(sq, board.width, board.height)
        if rays:
            for step, to_sq in enumerate(rays[0]):
                if not board.is_empty(to_sq):
                    break
                if to_sq.rank == last_rank:
                    for pt in PROMOTION_TYPES:
                        yield Move(sq, to_sq, MoveFlag.PROMOTION, pt)
                elif step == 0:
                    yield Move(sq, to_sq)
                else:
                    yield Move(sq, to_sq, MoveFlag.DOUBLE_PAWN)

        for to_sq in piece.attacks(sq, board.width, board.height):
            target = board[to_sq]
            if target is not None and target.color != color:
                if to_sq.rank == last_rank:
                    for pt in PROMOTION_TYPES:
                        yield Move(sq, to_sq, MoveFlag.PROMOTION, pt)
                else:
                    yield Move(sq, to_sq)
            elif (
                target is None
                and to_sq == board.en_passant
                and color == board.side_to_move
            ):
                yield Move(sq, to_sq, MoveFlag.EN_PASSANT)

    def _gen_castling(self, king_sq: Square, color: Color) -> Iterator[Move]:
        board = self._board
        rights = board.castling
        if not rights & CastlingRights.both(color):
            return
        if king_sq != board.king_home(color):
            return
        if self.is_in_check(color):
            return

        opponent = color.opposite
        for right, flag in (
            (CastlingRights.kingside(color), MoveFlag.CASTLE_KINGSIDE),
            (CastlingRights.queenside(color), MoveFlag.CASTLE_QUEENSIDE),
        ):
            if not rights & right:
                continue
            rook_sq, _ = board.castle_rook_squares(color, flag)
            if board[rook_sq] != Piece(color, PieceType.ROOK):
                continue
            if abs(rook_sq.file - king_sq.file) < 3:
                continue
            step = 1 if rook_sq.file > king_sq.file else -1
            between = [
                king_sq.offset(df, 0)
                for df in range(step, rook_sq.file - king_sq.file, step)
            ]
            if any(not board.is_empty(s) for s in between):
                continue
            crossing = (king_sq.offset(step, 0), king_sq.offset(2 * step, 0))
            if any(self.is_square_attacked(s, opponent) for s in crossing):
                continue
            yield Move(king_sq, crossing[1], flag)
