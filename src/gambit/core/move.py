"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import MoveFlag, PieceType
from gambit.core.types import Square, parse_square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    What the move captured and which flags it cleared are recorded by the
    board when the move is applied, so a ``Move`` stays a plain value that
    compares equal to the same move generated anywhere else.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @classmethod
    def parse(cls, text: str, flag: MoveFlag = MoveFlag.NORMAL) -> Move:
        """Build a move from coordinates, e.g. ``'e2e4'`` or ``'e7e8q'``.

        Only the squares and promotion piece are read; the flag must be
        supplied for special moves.  Prefer matching against
        :meth:`~gambit.core.board.Board.moves` for user input.
        """
        promotion: PieceType | None = None
        body = text.strip()
        if body and body[-1] in "nbrq":
            promotion = {v: k for k, v in _PROMO_CHARS.items()}[body[-1]]
            body = body[:-1]
            flag = MoveFlag.PROMOTION
        split = next(
            (i for i in range(2, len(body)) if body[i].isalpha()),
            None,
        )
        if split is None:
            raise ValueError(f"Invalid move text: {text!r}")
        return cls(parse_square(body[:split]), parse_square(body[split:]), flag, promotion)
