"""Board — piece placement, game flags and make/undo for any board size."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from gambit.core.enums import CastlingRights, Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.piece import Piece
from gambit.core.types import Square, square_name

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(frozen=True, slots=True)
class _UndoRecord:
    """Everything needed to reverse one applied move."""

    move: Move
    captured: Piece | None
    capture_sq: Square
    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    fullmove_number: int


class Board:
    """Mutable board: pieces, side to move, castling and en passant flags.

    Supports :meth:`move` / :meth:`undo` via an internal history stack and
    answers the rules questions (legal moves, check, checkmate, stalemate).
    The board trusts its caller: :meth:`move` applies whatever it is given,
    so only moves drawn from :meth:`moves` should ever be applied.
    """

    __slots__ = (
        "width",
        "height",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "_squares",
        "_king_squares",
        "_history",
    )

    def __init__(
        self,
        width: int = 8,
        height: int = 8,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        if width < 1 or height < 4:
            raise ValueError(f"Unsupported board size: {width}x{height}")
        self.width = width
        self.height = height
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self._squares: list[Piece | None] = [None] * (width * height)
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]
        self._history: list[_UndoRecord] = []

    # -- Element access -----------------------------------------------------

    def _index(self, sq: Square) -> int:
        if not sq.within(self.width, self.height):
            raise ValueError(f"Square {sq} is off the {self.width}x{self.height} board")
        return sq.rank * self.width + sq.file

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[self._index(sq)]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        idx = self._index(sq)
        old_piece = self._squares[idx]
        if old_piece is not None and old_piece.piece_type == PieceType.KING:
            if self._king_squares[int(old_piece.color)] == sq:
                self._king_squares[int(old_piece.color)] = None

        self._squares[idx] = piece
        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[int(piece.color)] = sq

    def contains(self, sq: Square) -> bool:
        return sq.within(self.width, self.height)

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    # -- Query helpers ------------------------------------------------------

    def squares(self) -> Iterator[Square]:
        """Every square, rank by rank from a1."""
        for rank in range(self.height):
            for file in range(self.width):
                yield Square(file, rank)

    def pieces(self, color: Color) -> list[Square]:
        """Squares occupied by *color*, in a1..h8 order."""
        width = self.width
        return [
            Square(idx % width, idx // width)
            for idx, piece in enumerate(self._squares)
            if piece is not None and piece.color == color
        ]

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[int(color)]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    def king_home(self, color: Color) -> Square:
        """Square the king must stand on to castle."""
        return Square(self.width // 2, self._home_rank(color))

    def castle_rook_squares(self, color: Color, flag: MoveFlag) -> tuple[Square, Square]:
        """``(from, to)`` of the rook for a castling move of *flag*."""
        rank = self._home_rank(color)
        king_file = self.width // 2
        if flag == MoveFlag.CASTLE_KINGSIDE:
            return Square(self.width - 1, rank), Square(king_file + 1, rank)
        if flag == MoveFlag.CASTLE_QUEENSIDE:
            return Square(0, rank), Square(king_file - 1, rank)
        raise ValueError(f"Not a castling flag: {flag!r}")

    def _home_rank(self, color: Color) -> int:
        return 0 if color == Color.WHITE else self.height - 1

    @property
    def history(self) -> tuple[Move, ...]:
        """Moves applied since construction (or since :meth:`copy`)."""
        return tuple(record.move for record in self._history)

    # -- Rules --------------------------------------------------------------

    def moves(self, origin: Square | Color) -> Iterator[Move]:
        """Lazily yield legal moves for the piece on a square or for a side.

        Each candidate is played on a scratch copy and kept only when the
        mover's king is not attacked afterwards, which covers pins and
        discovered checks without separate detection.
        """
        scratch = self.copy()
        gen = MoveGenerator(scratch)
        if isinstance(origin, Color):
            color = origin
            candidates = list(gen.pseudo_legal_moves_for(color))
        else:
            piece = self[origin]
            if piece is None:
                return iter(())
            color = piece.color
            candidates = list(gen.pseudo_legal_moves(origin))
        return _legal_only(scratch, candidates, color)

    def has_moves(self, color: Color) -> bool:
        return next(self.moves(color), None) is not None

    def check(self, color: Color) -> bool:
        """Is *color*'s king attacked?"""
        return MoveGenerator(self).is_in_check(color)

    def checkmate(self, color: Color) -> bool:
        return self.check(color) and not self.has_moves(color)

    def stalemate(self, color: Color) -> bool:
        return not self.check(color) and not self.has_moves(color)

    # -- Core move operations ---------------------------------------------

    def move(self, move: Move) -> None:
        """Apply *move*, pushing undo state onto the history stack."""
        piece = self[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {square_name(move.from_sq)}")

        captured = self[move.to_sq]
        capture_sq = move.to_sq

        # En passant: the captured pawn sits beside the origin square
        if move.flag == MoveFlag.EN_PASSANT:
            capture_sq = Square(move.to_sq.file, move.from_sq.rank)
            captured = self[capture_sq]

        self._history.append(
            _UndoRecord(
                move=move,
                captured=captured,
                capture_sq=capture_sq,
                castling=self.castling,
                en_passant=self.en_passant,
                halfmove_clock=self.halfmove_clock,
                fullmove_number=self.fullmove_number,
            )
        )

        self[move.from_sq] = None
        if captured is not None:
            self[capture_sq] = None

        placed_piece = piece
        if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            placed_piece = Piece(piece.color, move.promotion)
        self[move.to_sq] = placed_piece

        # Slide the rook for castling
        if move.is_castle:
            rook_from, rook_to = self.castle_rook_squares(piece.color, move.flag)
            rook = self[rook_from]
            self[rook_from] = None
            self[rook_to] = rook

        # En passant target for the opponent
        self.en_passant = None
        if move.flag == MoveFlag.DOUBLE_PAWN:
            self.en_passant = Square(
                move.from_sq.file, (move.from_sq.rank + move.to_sq.rank) // 2
            )

        self._update_castling(move, piece)

        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1

        self.side_to_move = self.side_to_move.opposite

    def undo(self) -> Move | None:
        """Undo the last :meth:`move`. Returns the undone move, or None."""
        if not self._history:
            return None
        record = self._history.pop()
        move = record.move

        piece = self[move.to_sq]
        assert piece is not None
        if move.flag == MoveFlag.PROMOTION:
            piece = Piece(piece.color, PieceType.PAWN)

        if move.is_castle:
            rook_from, rook_to = self.castle_rook_squares(piece.color, move.flag)
            self[rook_from] = self[rook_to]
            self[rook_to] = None

        self[move.to_sq] = None
        self[move.from_sq] = piece
        if record.captured is not None:
            self[record.capture_sq] = record.captured

        self.side_to_move = self.side_to_move.opposite
        self.castling = record.castling
        self.en_passant = record.en_passant
        self.halfmove_clock = record.halfmove_clock
        self.fullmove_number = record.fullmove_number
        return move

    # -- Castling bookkeeping ---------------------------------------------

    def _update_castling(self, move: Move, piece: Piece) -> None:
        if not self.castling:
            return
        if piece.piece_type == PieceType.KING:
            self.castling &= ~CastlingRights.both(piece.color)

        # A rook leaving its corner, or anything landing on it, ends that right
        corners = self._rook_corners()
        for sq in (move.from_sq, move.to_sq):
            right = corners.get(sq)
            if right is not None:
                self.castling &= ~right

    def _rook_corners(self) -> dict[Square, CastlingRights]:
        top = self.height - 1
        right = self.width - 1
        return {
            Square(0, 0): CastlingRights.WHITE_QUEENSIDE,
            Square(right, 0): CastlingRights.WHITE_KINGSIDE,
            Square(0, top): CastlingRights.BLACK_QUEENSIDE,
            Square(right, top): CastlingRights.BLACK_KINGSIDE,
        }

    # -- Copying / factory ------------------------------------------------

    def copy(self) -> Board:
        """Deep copy without history."""
        b = Board(
            width=self.width,
            height=self.height,
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )
        b._squares = self._squares.copy()
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * (self.width * self.height)
        self._king_squares = [None, None]
        self._history.clear()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls(castling=CastlingRights.ALL)
        for f in range(8):
            b[Square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
        for f, pt in enumerate(_BACK_RANK):
            b[Square(f, 0)] = Piece(Color.WHITE, pt)
            b[Square(f, 7)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self._squares == other._squares
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(self.height - 1, -1, -1):
            row = []
            for file in range(self.width):
                p = self[Square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1:>2} {' '.join(row)}")
        files = " ".join(square_name(Square(f, 0))[0] for f in range(self.width))
        rows.append(f"   {files}")
        return "\n".join(rows)


def _legal_only(scratch: Board, candidates: Iterable[Move], color: Color) -> Iterator[Move]:
    gen = MoveGenerator(scratch)
    for move in candidates:
        scratch.move(move)
        safe = not gen.is_in_check(color)
        scratch.undo()
        if safe:
            yield move
