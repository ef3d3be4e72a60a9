"""Evaluator base class shared by every feature set.

An evaluator scores a :class:`~texeltune.position.Position` twice over:
once for the side to move, then, after flipping the board, once for the
opponent. The running score is negated after each pass, so after both
passes it reads "side to move minus opponent", and every contribution is
also counted in a :class:`~texeltune.features.Trace` under the colour that
earned it. Subclasses only describe what one side scores
(:meth:`Evaluator.score_side`); flipping, tapering and vector building
live here.

Evaluators keep no per-call state, so one instance may be shared between
threads as long as each call gets its own input.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Sequence, Union

from . import bitboard as bbm
from .adapter import ExternalBoard, adapt_board
from .config import EvalConfig
from .errors import InvariantError
from .features import FeatureSchema, Pair, ParameterValue, Trace
from .fen import parse_fen
from .parameters import check_length, copy_parameters, render_scalar, render_tapered
from .position import Piece, Position, flip
from .utils import Logger, null_logger

PHASE_WEIGHTS = (0, 1, 1, 2, 4, 0)


@dataclass
class EvalResult:
    score: int
    endgame_scale: float
    coefficients: List[int] = field(default_factory=list)


class ScoreAccumulator:
    """Running midgame/endgame score and trace for a single evaluation."""

    __slots__ = ("trace", "weights", "mg", "eg", "phase", "color")

    def __init__(self, trace: Trace, weights: Sequence[Pair]) -> None:
        self.trace = trace
        self.weights = weights
        self.mg = 0
        self.eg = 0
        self.phase = 0
        self.color = 0

    def add(self, name: str, index: Union[int, Sequence[int]] = (), amount: int = 1) -> None:
        """Score ``amount`` hits of a tunable feature for the current colour."""

        if not amount:
            return
        slot = self.trace.add(name, index, self.color, amount)
        mg, eg = self.weights[slot]
        self.mg += mg * amount
        self.eg += eg * amount

    def bonus(self, weight: Pair) -> None:
        """Add a fixed, untuned term."""

        self.mg += weight[0]
        self.eg += weight[1]

    def negate(self) -> None:
        self.mg = -self.mg
        self.eg = -self.eg


def endgame_scale(position: Position, eg: int) -> float:
    """Scale factor for the endgame term.

    Uses the pawn count of whichever side ``eg`` favours; ``position`` and
    ``eg`` must both be relative to the side to move. Each missing pawn
    shrinks the factor quadratically, down to ``(128 - 64) / 128`` with no
    pawns left.
    """

    stronger = 0 if eg >= 0 else 1
    pawns = bbm.count(position.sides[stronger] & position.pieces[Piece.PAWN])
    missing = 8 - min(8, pawns)
    return (128 - missing * missing) / 128


class Evaluator(ABC):
    """Common driver for feature-set evaluators.

    Subclasses set :attr:`name`, build their schema in
    :meth:`build_schema` and score one side in :meth:`score_side`.
    """

    name = "evaluator"
    tempo: Optional[Pair] = None
    # Whether prepare_parameters honours EvalConfig.rebalance.
    rebalances = False

    def __init__(
        self,
        config: Optional[EvalConfig] = None,
        *,
        logger: Optional[Logger] = None,
    ) -> None:
        self.config = (config or EvalConfig()).clamp()
        self._logger = logger or null_logger
        self.schema = self.build_schema()
        self._weights = self.schema.default_weights()
        self._logger(
            f"{self.name}: {len(self.schema.families)} feature families, "
            f"{self.schema.size} parameters (tapered={self.config.tapered})"
        )
        if self.config.rebalance and not self.rebalances:
            self.config = replace(self.config, rebalance=False)
            self._logger(f"{self.name}: no tables to rebalance, printing parameters as given")

    @property
    def tapered(self) -> bool:
        return self.config.tapered

    # ------------------------------------------------------------------
    # Variant hooks
    # ------------------------------------------------------------------
    @abstractmethod
    def build_schema(self) -> FeatureSchema:
        ...

    @abstractmethod
    def score_side(self, position: Position, acc: ScoreAccumulator) -> None:
        """Score the pieces of ``position.sides[0]`` into ``acc``."""

    def prepare_parameters(self, parameters: List[ParameterValue]) -> List[ParameterValue]:
        """Adjust a copy of ``parameters`` before it is rendered."""

        return parameters

    def render_parameters(self, parameters: List[ParameterValue]) -> str:
        if self.tapered:
            return render_tapered(self.schema, parameters)
        return render_scalar(self.schema, parameters)

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------
    def _run_passes(self, position: Position) -> tuple[Position, ScoreAccumulator]:
        position.validate()
        acc = ScoreAccumulator(self.schema.new_trace(), self._weights)
        if self.tempo is not None:
            acc.bonus(self.tempo)

        for _ in range(2):
            acc.color = 1 if position.mirrored else 0
            self.score_side(position, acc)
            position = flip(position)
            acc.negate()
        return position, acc

    def evaluate(self, position: Position) -> EvalResult:
        position, acc = self._run_passes(position)
        score, scale = self._blend(position, acc)
        if position.mirrored:
            score = -score

        coefficients = acc.trace.coefficients()
        if len(coefficients) != self.schema.size:
            raise InvariantError(
                f"{self.name}: {len(coefficients)} coefficients for {self.schema.size} parameters"
            )
        return EvalResult(score=score, endgame_scale=scale, coefficients=coefficients)

    def _blend(self, position: Position, acc: ScoreAccumulator) -> tuple[int, float]:
        if not self.tapered:
            return acc.mg, 1.0

        max_phase = self.config.max_phase
        phase = min(acc.phase, max_phase)
        scale = endgame_scale(position, acc.eg) if self.config.endgame_scaling else 1.0
        blended = (acc.mg * phase + acc.eg * scale * (max_phase - phase)) / max_phase
        return math.trunc(blended), scale

    def trace(self, position: Position) -> Trace:
        """Return the raw per-colour trace for ``position``."""

        return self._run_passes(position)[1].trace

    def evaluate_from_fen(self, fen: str) -> EvalResult:
        return self.evaluate(parse_fen(fen))

    def evaluate_from_external(self, board: ExternalBoard) -> EvalResult:
        return self.evaluate(adapt_board(board))

    # ------------------------------------------------------------------
    # Parameter vectors
    # ------------------------------------------------------------------
    def initial_parameters(self) -> List[ParameterValue]:
        parameters = self.schema.initial_parameters(self.tapered)
        check_length(self.schema, parameters)
        return parameters

    def format_parameters(self, parameters: Sequence[ParameterValue]) -> str:
        check_length(self.schema, parameters)
        prepared = self.prepare_parameters(copy_parameters(parameters))
        return self.render_parameters(prepared)

    def print_parameters(
        self,
        parameters: Sequence[ParameterValue],
        *,
        output: Callable[[str], None] = print,
    ) -> str:
        text = self.format_parameters(parameters)
        self._logger(f"{self.name}: printing {len(parameters)} parameters")
        output(text)
        return text


__all__ = [
    "EvalResult",
    "Evaluator",
    "PHASE_WEIGHTS",
    "ScoreAccumulator",
    "endgame_scale",
]
