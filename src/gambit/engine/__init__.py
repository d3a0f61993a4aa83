"""Chess engine package: configuration, evaluation and minimax search."""

from gambit.engine.config import DEFAULT_PIECE_VALUES, EngineConfig
from gambit.engine.evaluation import Evaluator
from gambit.engine.minimax import MATE_SCORE, MinimaxEngine
from gambit.engine.search import CancelCheck, IEngine, ProgressCallback, SearchResult

__all__ = [
    "CancelCheck",
    "DEFAULT_PIECE_VALUES",
    "EngineConfig",
    "Evaluator",
    "IEngine",
    "MATE_SCORE",
    "MinimaxEngine",
    "ProgressCallback",
    "SearchResult",
]
