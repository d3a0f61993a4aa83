"""FEN parsing and serialization for board setup.

Ranks may be any width; runs of empty squares wider than nine are written as
multi-digit numbers (``"10"`` for an empty rank of a 10-file board).
"""

from __future__ import annotations

import re

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color
from gambit.core.piece import Piece
from gambit.core.types import Square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_RANK_TOKEN = re.compile(r"\d+|.")
_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def _parse_rank(rank_text: str, fen: str) -> list[Piece | None]:
    row: list[Piece | None] = []
    for token in _RANK_TOKEN.findall(rank_text):
        if token.isdigit():
            step = int(token)
            if step < 1:
                raise ValueError(f"Invalid FEN digit {token!r}: {fen!r}")
            row.extend([None] * step)
        else:
            row.append(Piece.from_char(token))
    return row


def board_from_fen(fen: str) -> Board:
    """Parse a FEN string into a :class:`Board`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    rows = [_parse_rank(text, fen) for text in placement.split("/")]
    height = len(rows)
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        expected_ep_rank = height - 3 if side == Color.WHITE else 2
        if ep.rank != expected_ep_rank or ep.file >= width:
            raise ValueError(f"Invalid FEN en-passant square: {ep_part!r}")

    # 5–6. Clocks (optional)
    halfmove = int(parts[4]) if len(parts) > 4 else 0
    if halfmove < 0:
        raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")
    fullmove = int(parts[5]) if len(parts) > 5 else 1
    if fullmove < 1:
        raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    board = Board(width, height, side, castling, ep, halfmove, fullmove)
    for rank_idx, row in enumerate(rows):
        rank = height - 1 - rank_idx
        for file, piece in enumerate(row):
            if piece is not None:
                board[Square(file, rank)] = piece
    return board


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    rows: list[str] = []
    for rank in range(board.height - 1, -1, -1):
        empty = 0
        row = ""
        for file in range(board.width):
            piece = board[Square(file, rank)]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)

    side_str = "w" if board.side_to_move == Color.WHITE else "b"
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if board.castling & right
    )
    ep_str = square_name(board.en_passant) if board.en_passant is not None else "-"

    return (
        f"{'/'.join(rows)} {side_str} {castling_str or '-'} {ep_str} "
        f"{board.halfmove_clock} {board.fullmove_number}"
    )
