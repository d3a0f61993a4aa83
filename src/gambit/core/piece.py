"""Piece value object and per-type movement geometry."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from gambit.core.enums import Color, PieceType
from gambit.core.types import Square

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_SLIDING_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}

Ray = tuple[Square, ...]


def pawn_direction(color: Color) -> int:
    """Rank delta of a single pawn step for *color*."""
    return 1 if color == Color.WHITE else -1


def pawn_start_rank(color: Color, height: int) -> int:
    """Rank from which *color*'s pawns may double-step."""
    return 1 if color == Color.WHITE else height - 2


def promotion_rank(color: Color, height: int) -> int:
    """Rank on which *color*'s pawns promote."""
    return height - 1 if color == Color.WHITE else 0


@lru_cache(maxsize=None)
def _step_rays(
    offsets: tuple[tuple[int, int], ...], sq: Square, width: int, height: int
) -> tuple[Ray, ...]:
    rays: list[Ray] = []
    for df, dr in offsets:
        target = sq.offset(df, dr)
        if target.within(width, height):
            rays.append((target,))
    return tuple(rays)


@lru_cache(maxsize=None)
def _slide_rays(
    directions: tuple[tuple[int, int], ...], sq: Square, width: int, height: int
) -> tuple[Ray, ...]:
    rays: list[Ray] = []
    for df, dr in directions:
        ray: list[Square] = []
        target = sq.offset(df, dr)
        while target.within(width, height):
            ray.append(target)
            target = target.offset(df, dr)
        if ray:
            rays.append(tuple(ray))
    return tuple(rays)


@lru_cache(maxsize=None)
def _pawn_push_ray(color: Color, sq: Square, width: int, height: int) -> Ray:
    step = pawn_direction(color)
    ray: list[Square] = []
    one = sq.offset(0, step)
    if one.within(width, height):
        ray.append(one)
        two = sq.offset(0, 2 * step)
        # On short boards the double step would reach the last rank; it is
        # left out so a promotion is always a single step.
        if (
            sq.rank == pawn_start_rank(color, height)
            and two.within(width, height)
            and two.rank != promotion_rank(color, height)
        ):
            ray.append(two)
    return tuple(ray)


@lru_cache(maxsize=None)
def _pawn_attacks(color: Color, sq: Square, width: int, height: int) -> Ray:
    step = pawn_direction(color)
    return tuple(
        target
        for target in (sq.offset(-1, step), sq.offset(1, step))
        if target.within(width, height)
    )


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    # ── Geometry ─────────────────────────────────────────────────────────

    def rays(self, sq: Square, width: int = 8, height: int = 8) -> tuple[Ray, ...]:
        """Movement rays from *sq*, ordered outward, ignoring occupancy.

        Knights and kings produce single-square rays.  A pawn produces one
        push ray (one or two squares); its diagonal captures come from
        :meth:`attacks`.
        """
        _require_on_board(sq, width, height)
        ptype = self.piece_type
        if ptype == PieceType.PAWN:
            ray = _pawn_push_ray(self.color, sq, width, height)
            return (ray,) if ray else ()
        if ptype == PieceType.KNIGHT:
            return _step_rays(KNIGHT_OFFSETS, sq, width, height)
        if ptype == PieceType.KING:
            return _step_rays(KING_OFFSETS, sq, width, height)
        return _slide_rays(_SLIDING_DIRS[ptype], sq, width, height)

    def attacks(self, sq: Square, width: int = 8, height: int = 8) -> Ray:
        """Squares this piece would capture on from *sq* on an empty board."""
        _require_on_board(sq, width, height)
        if self.piece_type == PieceType.PAWN:
            return _pawn_attacks(self.color, sq, width, height)
        return tuple(target for ray in self.rays(sq, width, height) for target in ray)

    def reach(self, sq: Square, width: int = 8, height: int = 8) -> frozenset[Square]:
        """Every square reachable in one move from *sq*, ignoring the board."""
        targets = {target for ray in self.rays(sq, width, height) for target in ray}
        if self.piece_type == PieceType.PAWN:
            targets.update(self.attacks(sq, width, height))
        return frozenset(targets)


def _require_on_board(sq: Square, width: int, height: int) -> None:
    if not sq.within(width, height):
        raise ValueError(f"Square {sq} is off the {width}x{height} board")
