"""Depth-bounded minimax search (negamax form with alpha-beta pruning)."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from gambit.core.board import Board
from gambit.core.enums import Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.engine.config import EngineConfig
from gambit.engine.evaluation import Evaluator
from gambit.engine.search import CancelCheck, IEngine, ProgressCallback, SearchResult

_LOGGER = logging.getLogger(__name__)

MATE_SCORE = 100_000
_INF_SCORE = 1_000_000


def _never_cancelled() -> bool:
    return False


@dataclass(slots=True)
class _SearchRun:
    """Per-call bookkeeping; nothing survives between searches."""

    evaluator: Evaluator
    is_cancelled: CancelCheck
    nodes: int = 0


class MinimaxEngine(IEngine):
    """Classical minimax searcher.

    The caller's board is never touched: every search runs on a private copy.
    Move choice is deterministic; among equally scored moves the first one
    in generation order wins.
    """

    __slots__ = ("_config",)

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or EngineConfig()

    @property
    def config(self) -> EngineConfig:
        return self._config

    def select_move(
        self,
        board: Board,
        color: Color,
        depth: int | None = None,
        on_progress: ProgressCallback | None = None,
        is_cancelled: CancelCheck | None = None,
    ) -> Move | None:
        """Best move for *color*, or None if it has no legal moves."""
        return self.search(board, color, depth, on_progress, is_cancelled).best_move

    def search(
        self,
        board: Board,
        color: Color,
        depth: int | None = None,
        on_progress: ProgressCallback | None = None,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        depth = self._config.depth if depth is None else depth
        if depth <= 0:
            raise ValueError("Search depth must be >= 1")

        work = board.copy()
        if work.side_to_move != color:
            work.side_to_move = color
            work.en_passant = None

        run = _SearchRun(Evaluator(self._config), is_cancelled or _never_cancelled)
        root_moves = self._order_moves(work, list(work.moves(color)), run.evaluator)
        if not root_moves:
            score = -MATE_SCORE if work.check(color) else 0
            return SearchResult(None, score, 0, run.nodes)

        best_move: Move | None = None
        best_score = -_INF_SCORE
        alpha = -_INF_SCORE
        total = len(root_moves)

        for index, move in enumerate(root_moves):
            if best_move is not None and run.is_cancelled():
                _LOGGER.debug("Search cancelled after %d/%d root moves", index, total)
                break

            work.move(move)
            score = -self._negamax(work, depth - 1, -_INF_SCORE, -alpha, 1, run)
            work.undo()

            if score > best_score:
                best_score = score
                best_move = move
            if score > alpha:
                alpha = score
            if on_progress is not None:
                on_progress((index + 1) / total)

        _LOGGER.debug(
            "Searched %s to depth %d: best=%s score=%d nodes=%d",
            color,
            depth,
            best_move,
            best_score,
            run.nodes,
        )
        return SearchResult(best_move, best_score, depth, run.nodes)

    def _negamax(
        self,
        board: Board,
        depth: int,
        alpha: int,
        beta: int,
        ply: int,
        run: _SearchRun,
    ) -> int:
        run.nodes += 1
        side = board.side_to_move

        if depth <= 0 or run.is_cancelled():
            if not board.has_moves(side):
                return self._terminal_score(board, side, ply)
            return run.evaluator.evaluate(board, side)

        legal = list(board.moves(side))
        if not legal:
            return self._terminal_score(board, side, ply)

        best_score = -_INF_SCORE
        for move in self._order_moves(board, legal, run.evaluator):
            board.move(move)
            score = -self._negamax(board, depth - 1, -beta, -alpha, ply + 1, run)
            board.undo()

            if score > best_score:
                best_score = score
            if score > alpha:
                alpha = score
            if alpha >= beta:
                break
        return best_score

    @staticmethod
    def _terminal_score(board: Board, side: Color, ply: int) -> int:
        # Mates found nearer the root score further from zero.
        if board.check(side):
            return -(MATE_SCORE - ply)
        return 0

    @staticmethod
    def _order_moves(board: Board, moves: list[Move], evaluator: Evaluator) -> list[Move]:
        """Promotions, then captures by most valuable victim / least valuable
        attacker, then quiet moves in generation order."""

        def score(move: Move) -> int:
            moving_piece = board[move.from_sq]
            assert moving_piece is not None
            value = 0
            if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
                value += 20_000 + evaluator.piece_value(move.promotion)
            target = board[move.to_sq]
            if move.flag == MoveFlag.EN_PASSANT:
                target_type: PieceType | None = PieceType.PAWN
            else:
                target_type = target.piece_type if target is not None else None
            if target_type is not None:
                value += 10_000 + 10 * evaluator.piece_value(target_type)
                value -= evaluator.piece_value(moving_piece.piece_type)
            return value

        return sorted(moves, key=score, reverse=True)
