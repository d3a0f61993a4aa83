"""Enumerations shared by the board, the engine and the game layer."""

from __future__ import annotations

from enum import IntEnum, IntFlag


class Color(IntEnum):
    """A side of the game. The value indexes per-side tables (0 = White)."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveFlag(IntEnum):
    """How the board must apply and reverse a move beyond from -> to."""

    NORMAL = 0
    DOUBLE_PAWN = 1  # leaves an en-passant target behind
    EN_PASSANT = 2  # captured pawn is beside the origin, not on the target
    CASTLE_KINGSIDE = 3  # rook slides too
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5  # Move.promotion names the new piece


class CastlingRights(IntFlag):
    """Castling still permitted, one bit per side and wing."""

    NONE = 0
    WHITE_KINGSIDE = 1
    WHITE_QUEENSIDE = 2
    BLACK_KINGSIDE = 4
    BLACK_QUEENSIDE = 8

    WHITE_BOTH = 3
    BLACK_BOTH = 12
    ALL = 15

    @classmethod
    def kingside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_KINGSIDE if color == Color.WHITE else cls.BLACK_KINGSIDE

    @classmethod
    def queenside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_QUEENSIDE if color == Color.WHITE else cls.BLACK_QUEENSIDE

    @classmethod
    def both(cls, color: Color) -> CastlingRights:
        return cls.kingside(color) | cls.queenside(color)
