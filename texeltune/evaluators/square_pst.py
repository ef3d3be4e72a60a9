"""Evaluator with full 64-square tables and per-count mobility tables.

Every piece kind has one weight per square, and knights, bishops, rooks and
queens have one weight per possible number of attacked squares, so a tuner
can learn non-linear mobility curves. Squares are indexed rank 8 first from
the owner's point of view, so a table reads like a board diagram with the
owner at the bottom. Attacks use every piece as a blocker and include
squares held by friendly pieces.
"""

from __future__ import annotations

from typing import List

from .. import attacks
from .. import bitboard as bbm
from ..evaluation import PHASE_WEIGHTS, Evaluator, ScoreAccumulator
from ..features import FeatureSchema, ParameterValue
from ..parameters import render_pairs, render_scalar
from ..position import PIECE_NAMES, Piece, Position

MOBILITY_PIECES = (Piece.KNIGHT, Piece.BISHOP, Piece.ROOK, Piece.QUEEN)

# A queen on an open board attacks at most 27 squares.
MAX_ATTACKS = 28

PSQT = tuple((0,) * 64 for _ in Piece)
MOBILITIES = tuple((0,) * MAX_ATTACKS for _ in MOBILITY_PIECES)


def attack_count(sq: int, piece: int, occupied: int) -> int:
    if piece == Piece.KNIGHT:
        return bbm.count(attacks.knight(sq))
    if piece == Piece.BISHOP:
        return bbm.count(attacks.bishop(sq, occupied))
    if piece == Piece.ROOK:
        return bbm.count(attacks.rook(sq, occupied))
    return bbm.count(attacks.queen(sq, occupied))


class SquarePstEvaluator(Evaluator):
    name = "square_pst"

    def build_schema(self) -> FeatureSchema:
        schema = FeatureSchema(self.name)
        schema.declare("psqt", PSQT, row_names=PIECE_NAMES)
        schema.declare("mobilities", MOBILITIES, row_names=tuple(PIECE_NAMES[p] for p in MOBILITY_PIECES))
        return schema

    def score_side(self, position: Position, acc: ScoreAccumulator) -> None:
        occupied = position.occupied
        for piece in Piece:
            for sq in bbm.squares(position.own(piece)):
                acc.phase += PHASE_WEIGHTS[piece]
                acc.add("psqt", (piece, sq ^ 56))
                if piece in MOBILITY_PIECES:
                    acc.add("mobilities", (piece - 1, attack_count(sq, piece, occupied)))

    def render_parameters(self, parameters: List[ParameterValue]) -> str:
        if self.tapered:
            return render_pairs(self.schema, parameters)
        return render_scalar(self.schema, parameters)


__all__ = ["MAX_ATTACKS", "MOBILITY_PIECES", "SquarePstEvaluator", "attack_count"]
