"""Evaluator with rank and file piece-square tables.

Each piece scores its material value plus one entry from a per-piece rank
table and one from a per-piece file table (48 entries each), instead of a
full 64-square table. On top of that: slider and king mobility, slider
attacks on the enemy king zone, open and semi-open files per piece kind,
the bishop pair, and a fixed tempo bonus for the side to move.
"""

from __future__ import annotations

from typing import List

from .. import attacks
from .. import bitboard as bbm
from ..evaluation import PHASE_WEIGHTS, Evaluator, ScoreAccumulator
from ..features import FeatureSchema, ParameterValue, S
from ..parameters import rebalance_psts
from ..position import PIECE_NAMES, Piece, Position

TEMPO = S(16, 16)

MATERIAL = (S(89, 147), S(350, 521), S(361, 521), S(479, 956), S(1046, 1782), 0)

PST_RANK = (
    0,         S(-3, 0),  S(-3, -1), S(-1, -1), S(1, 0),  S(5, 3),  0,        0,          # Pawn
    S(-2, -5), S(0, -3),  S(1, -1),  S(3, 3),   S(4, 4),  S(5, 1),  S(2, 0),  S(-15, 1),  # Knight
    S(0, -2),  S(2, -1),  S(2, 0),   S(2, 0),   S(2, 0),  S(2, 0),  S(-1, 0), S(-10, 2),  # Bishop
    S(0, -3),  S(-1, -3), S(-2, -2), S(-2, 0),  S(0, 2),  S(2, 2),  S(1, 3),  S(2, 1),    # Rook
    S(2, -11), S(3, -8),  S(2, -3),  S(0, 2),   S(0, 5),  S(-1, 5), S(-4, 7), S(-2, 4),   # Queen
    S(-1, -6), S(1, -2),  S(-1, 0),  S(-4, 3),  S(-1, 5), S(5, 4),  S(5, 2),  S(5, -6),   # King
)

PST_FILE = (
    S(-1, 1),  S(-2, 1),  S(-1, 0), S(0, -1), S(1, 0),  S(2, 0),  S(2, 0),  S(-1, 0),   # Pawn
    S(-4, -3), S(-1, -1), S(0, 1),  S(2, 3),  S(2, 3),  S(2, 0),  S(1, -1), S(-1, -3),  # Knight
    S(-2, -1), 0,         S(1, 0),  S(0, 1),  S(1, 1),  S(0, 1),  S(2, 0),  S(-1, -1),  # Bishop
    S(-2, 0),  S(-1, 1),  S(0, 1),  S(1, 0),  S(2, -1), S(1, 0),  S(1, 0),  S(-1, -1),  # Rook
    S(-2, -3), S(-1, -1), S(-1, 0), S(0, 1),  S(0, 2),  S(1, 2),  S(2, 0),  S(1, -1),   # Queen
    S(-2, -5), S(2, -1),  S(-1, 1), S(-4, 2), S(-4, 2), S(-2, 2), S(2, -1), S(0, -5),   # King
)

MOBILITIES = (0, 0, 0, 0, 0, 0)
KING_ATTACKS = (0, 0, 0, 0, 0, 0)
# [semi-open, fully open][piece]
OPEN_FILES = ((0, 0, 0, 0, 0, 0), (0, 0, 0, 0, 0, 0))
BISHOP_PAIR = 0


def front_span(sq: int) -> int:
    """Squares on the file of ``sq`` strictly in front of it."""

    return bbm.north((bbm.FILE_A << sq) & bbm.FULL)


def mobility(sq: int, piece: int, position: Position) -> int:
    if piece == Piece.KNIGHT:
        return attacks.knight(sq)
    if piece == Piece.KING:
        return attacks.king(sq)
    if piece == Piece.PAWN:
        return 0
    blockers = position.occupied
    moves = 0
    if piece in (Piece.ROOK, Piece.QUEEN):
        moves |= attacks.rook(sq, blockers)
    if piece in (Piece.BISHOP, Piece.QUEEN):
        moves |= attacks.bishop(sq, blockers)
    return moves


class SplitPstEvaluator(Evaluator):
    name = "split_pst"
    tempo = TEMPO
    rebalances = True

    def build_schema(self) -> FeatureSchema:
        schema = FeatureSchema(self.name)
        schema.declare("material", MATERIAL)
        schema.declare("pst_rank", PST_RANK, shape=(6, 8), row_names=PIECE_NAMES)
        schema.declare("pst_file", PST_FILE, shape=(6, 8), row_names=PIECE_NAMES)
        schema.declare("mobilities", MOBILITIES)
        schema.declare("king_attacks", KING_ATTACKS)
        schema.declare("open_files", OPEN_FILES)
        schema.declare("bishop_pair", BISHOP_PAIR)
        return schema

    def score_side(self, position: Position, acc: ScoreAccumulator) -> None:
        own = position.sides[0]
        own_pawns = position.own(Piece.PAWN)
        opp_pawns = position.theirs(Piece.PAWN)
        opp_king = position.theirs(Piece.KING)
        opp_king_zone = attacks.king(bbm.lsb(opp_king)) if opp_king else 0

        if bbm.count(position.own(Piece.BISHOP)) == 2:
            acc.add("bishop_pair")

        for piece in Piece:
            for sq in bbm.squares(position.own(piece)):
                acc.phase += PHASE_WEIGHTS[piece]
                acc.add("material", piece)
                acc.add("pst_rank", (piece, bbm.square_rank(sq)))
                acc.add("pst_file", (piece, bbm.square_file(sq)))

                ahead = front_span(sq)
                if not ahead & own_pawns:
                    fully_open = 0 if ahead & opp_pawns else 1
                    acc.add("open_files", (fully_open, piece))

                if piece > Piece.KNIGHT:
                    moves = mobility(sq, piece, position)
                    acc.add("mobilities", piece, bbm.count(moves & ~own))
                    if piece != Piece.KING:
                        acc.add("king_attacks", piece, bbm.count(moves & opp_king_zone))

    def prepare_parameters(self, parameters: List[ParameterValue]) -> List[ParameterValue]:
        if not self.config.rebalance:
            return parameters
        rebalance_psts(
            parameters,
            material_offset=self.schema.offset("material"),
            pst_offset=self.schema.offset("pst_rank"),
            pst_size=8,
            tapered=self.tapered,
            pawn_exclusion=self.config.pawn_rank_exclusion,
        )
        rebalance_psts(
            parameters,
            material_offset=self.schema.offset("material"),
            pst_offset=self.schema.offset("pst_file"),
            pst_size=8,
            tapered=self.tapered,
        )
        return parameters


__all__ = ["SplitPstEvaluator", "front_span", "mobility"]
