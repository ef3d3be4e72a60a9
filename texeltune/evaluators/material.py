"""Material-only evaluator.

The smallest useful feature set: one weight per piece kind. Mostly useful
as a sanity baseline for a tuning run, since the fitted values should land
near the textbook piece values.
"""

from __future__ import annotations

from .. import bitboard as bbm
from ..evaluation import PHASE_WEIGHTS, Evaluator, ScoreAccumulator
from ..features import FeatureSchema, S
from ..position import Piece, Position

MATERIAL = (S(82, 94), S(337, 281), S(365, 297), S(477, 512), S(1025, 936), 0)


class MaterialEvaluator(Evaluator):
    name = "material"

    def build_schema(self) -> FeatureSchema:
        schema = FeatureSchema(self.name)
        schema.declare("material", MATERIAL)
        return schema

    def score_side(self, position: Position, acc: ScoreAccumulator) -> None:
        for piece in Piece:
            pieces = bbm.count(position.own(piece))
            acc.phase += PHASE_WEIGHTS[piece] * pieces
            acc.add("material", piece, pieces)


__all__ = ["MaterialEvaluator"]
