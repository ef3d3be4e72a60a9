"""Public package interface for texeltune."""

from .adapter import adapt_board
from .config import DEFAULT_EVALUATOR, EvalConfig
from .errors import (
    AdapterError,
    EmptyBitboardError,
    FenError,
    InvariantError,
    TexelTuneError,
)
from .evaluation import EvalResult, Evaluator
from .evaluators import (
    EvaluatorRegistry,
    MaterialEvaluator,
    SplitPstEvaluator,
    SquarePstEvaluator,
    create_evaluator,
)
from .features import FeatureSchema, S, Trace
from .fen import parse_fen
from .position import Piece, Position, flip

__all__ = [
    "AdapterError",
    "DEFAULT_EVALUATOR",
    "EmptyBitboardError",
    "EvalConfig",
    "EvalResult",
    "Evaluator",
    "EvaluatorRegistry",
    "FeatureSchema",
    "FenError",
    "InvariantError",
    "MaterialEvaluator",
    "Piece",
    "Position",
    "S",
    "SplitPstEvaluator",
    "SquarePstEvaluator",
    "TexelTuneError",
    "Trace",
    "adapt_board",
    "create_evaluator",
    "flip",
    "parse_fen",
]
