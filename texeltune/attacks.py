"""Attack generation for leapers and sliders.

Knight and king patterns come from masked shifts of the source bit. Slider
attacks are computed on demand by flooding each ray from the source square:
there are no lookup tables, so nothing needs to be built at import time and
the functions stay usable from any thread.

Attack sets include the first blocker on each ray whatever its colour, so
the result counts potential captures of friendly pieces as well. That is all
mobility and king-zone features need; legality is never considered.
"""

from __future__ import annotations

from . import bitboard as bbm
from .bitboard import Bitboard, Direction

# Longest possible ray on an 8x8 board.
MAX_RAY_LENGTH = 7

_NOT_FILE_H = 0x7F7F7F7F7F7F7F7F
_NOT_FILE_A = 0xFEFEFEFEFEFEFEFE
_NOT_FILES_GH = 0x3F3F3F3F3F3F3F3F
_NOT_FILES_AB = 0xFCFCFCFCFCFCFCFC

BISHOP_DIRECTIONS = (bbm.nw, bbm.ne, bbm.sw, bbm.se)
ROOK_DIRECTIONS = (bbm.north, bbm.east, bbm.south, bbm.west)


def knight(sq: int) -> Bitboard:
    b = 1 << sq
    return (
        ((((b << 15) | (b >> 17)) & _NOT_FILE_H)
         | (((b << 17) | (b >> 15)) & _NOT_FILE_A)
         | (((b << 10) | (b >> 6)) & _NOT_FILES_AB)
         | (((b << 6) | (b >> 10)) & _NOT_FILES_GH))
        & bbm.FULL
    )


def king(sq: int) -> Bitboard:
    b = 1 << sq
    return (
        ((b << 8)
         | (b >> 8)
         | (((b >> 1) | (b >> 9) | (b << 7)) & _NOT_FILE_H)
         | (((b << 1) | (b << 9) | (b >> 7)) & _NOT_FILE_A))
        & bbm.FULL
    )


def ray(sq: int, blockers: Bitboard, direction: Direction) -> Bitboard:
    """Flood ``direction`` from ``sq`` until the edge or the first blocker.

    The first step is always taken. Each later step only continues from
    squares that are not blocked, so a blocker ends up in the mask and
    nothing behind it does.
    """

    mask = direction(1 << sq)
    for _ in range(MAX_RAY_LENGTH - 1):
        mask |= direction(mask & ~blockers)
    return mask


def bishop(sq: int, blockers: Bitboard) -> Bitboard:
    mask = 0
    for direction in BISHOP_DIRECTIONS:
        mask |= ray(sq, blockers, direction)
    return mask


def rook(sq: int, blockers: Bitboard) -> Bitboard:
    mask = 0
    for direction in ROOK_DIRECTIONS:
        mask |= ray(sq, blockers, direction)
    return mask


def queen(sq: int, blockers: Bitboard) -> Bitboard:
    return bishop(sq, blockers) | rook(sq, blockers)


__all__ = [
    "BISHOP_DIRECTIONS",
    "MAX_RAY_LENGTH",
    "ROOK_DIRECTIONS",
    "bishop",
    "king",
    "knight",
    "queen",
    "ray",
    "rook",
]
