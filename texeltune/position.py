"""Side-relative board representation used by every evaluator.

A :class:`Position` never stores White and Black directly. ``sides[0]`` is
always the side the evaluator is currently scoring ("own") and ``sides[1]``
its opponent. :func:`flip` mirrors the board vertically and swaps the two
sides, so the same evaluation code can score either colour as if it were
White moving up the board. ``mirrored`` records whether an odd number of
flips separates the position from the real board, which is how callers
recover White and Black again.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Tuple

from . import bitboard as bbm
from .bitboard import Bitboard
from .errors import InvariantError


class Piece(IntEnum):
    PAWN = 0
    KNIGHT = 1
    BISHOP = 2
    ROOK = 3
    QUEEN = 4
    KING = 5


PIECES: Tuple[Piece, ...] = tuple(Piece)
PIECE_NAMES: Tuple[str, ...] = ("Pawn", "Knight", "Bishop", "Rook", "Queen", "King")

# Castling slots, in the order they are stored.
OWN_KING_SIDE = 0
OWN_QUEEN_SIDE = 1
OPP_KING_SIDE = 2
OPP_QUEEN_SIDE = 3

START_SIDES: Tuple[Bitboard, Bitboard] = (0x000000000000FFFF, 0xFFFF000000000000)
START_PIECES: Tuple[Bitboard, ...] = (
    0x00FF00000000FF00,
    0x4200000000000042,
    0x2400000000000024,
    0x8100000000000081,
    0x0800000000000008,
    0x1000000000000010,
)


@dataclass(frozen=True)
class Position:
    """Immutable position snapshot.

    The default instance is the standard starting position with White to
    move.
    """

    sides: Tuple[Bitboard, Bitboard] = START_SIDES
    pieces: Tuple[Bitboard, ...] = START_PIECES
    castling: Tuple[bool, bool, bool, bool] = (True, True, True, True)
    en_passant: Bitboard = 0
    mirrored: bool = False

    @property
    def occupied(self) -> Bitboard:
        return self.sides[0] | self.sides[1]

    def own(self, piece: int) -> Bitboard:
        return self.sides[0] & self.pieces[piece]

    def theirs(self, piece: int) -> Bitboard:
        return self.sides[1] & self.pieces[piece]

    def piece_at(self, sq: int) -> Tuple[int, int] | None:
        """Return ``(piece, side)`` for an occupied square, else ``None``."""

        mask = 1 << sq
        for side in (0, 1):
            if self.sides[side] & mask:
                for piece in PIECES:
                    if self.pieces[piece] & mask:
                        return int(piece), side
        return None

    def validate(self) -> None:
        """Check the occupancy invariants, raising :class:`InvariantError`."""

        if len(self.sides) != 2 or len(self.pieces) != 6 or len(self.castling) != 4:
            raise InvariantError("position has malformed bitboard arrays")
        if any(bb >> 64 for bb in (*self.sides, *self.pieces, self.en_passant)):
            raise InvariantError("bitboard holds bits beyond square 63")
        if self.sides[0] & self.sides[1]:
            raise InvariantError(
                f"side bitboards overlap on {bbm.count(self.sides[0] & self.sides[1])} square(s)"
            )
        seen = 0
        for piece in PIECES:
            if self.pieces[piece] & seen:
                raise InvariantError(f"{PIECE_NAMES[piece].lower()} bitboard overlaps another piece kind")
            seen |= self.pieces[piece]
        if seen != self.occupied:
            raise InvariantError("piece bitboards do not match side occupancy")
        if self.en_passant and bbm.count(self.en_passant) != 1:
            raise InvariantError("en passant mask must hold at most one square")


def flip(position: Position) -> Position:
    """Return the vertically mirrored position with the sides swapped.

    Applying :func:`flip` twice returns an equal position.
    """

    own, theirs = position.sides
    castling = position.castling
    return replace(
        position,
        sides=(bbm.flip(theirs), bbm.flip(own)),
        pieces=tuple(bbm.flip(bb) for bb in position.pieces),
        castling=(
            castling[OPP_KING_SIDE],
            castling[OPP_QUEEN_SIDE],
            castling[OWN_KING_SIDE],
            castling[OWN_QUEEN_SIDE],
        ),
        en_passant=bbm.flip(position.en_passant),
        mirrored=not position.mirrored,
    )


__all__ = [
    "OPP_KING_SIDE",
    "OPP_QUEEN_SIDE",
    "OWN_KING_SIDE",
    "OWN_QUEEN_SIDE",
    "PIECES",
    "PIECE_NAMES",
    "Piece",
    "Position",
    "START_PIECES",
    "START_SIDES",
    "flip",
]
