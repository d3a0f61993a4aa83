"""Square value object and coordinate helpers.

Squares are ``(file, rank)`` pairs counted from White's lower-left corner:
``a1 = (0, 0)``, ``h1 = (7, 0)``, ``a8 = (0, 7)``.  A square knows nothing
about board size; the :class:`~gambit.core.board.Board` bounds-checks it.
"""

from __future__ import annotations

from dataclasses import dataclass

_FILE_LETTERS = "abcdefghijklmnopqrstuvwxyz"


@dataclass(frozen=True, slots=True, order=True)
class Square:
    """A board coordinate."""

    file: int
    rank: int

    def offset(self, df: int, dr: int) -> Square:
        """Square shifted by *df* files and *dr* ranks (not bounds-checked)."""
        return Square(self.file + df, self.rank + dr)

    def within(self, width: int, height: int) -> bool:
        """Whether the square lies on a *width* x *height* board."""
        return 0 <= self.file < width and 0 <= self.rank < height

    def __str__(self) -> str:
        return square_name(self)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(4, 3)`` → ``'e4'``."""
    if not 0 <= sq.file < len(_FILE_LETTERS) or sq.rank < 0:
        return f"({sq.file},{sq.rank})"
    return _FILE_LETTERS[sq.file] + str(sq.rank + 1)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. ``'e4'`` → ``Square(4, 3)``."""
    if (
        len(name) < 2
        or name[0] not in _FILE_LETTERS
        or not name[1:].isdigit()
        or int(name[1:]) < 1
    ):
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(_FILE_LETTERS.index(name[0]), int(name[1:]) - 1)
