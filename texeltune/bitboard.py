"""Bitboard primitives.

A bitboard is a plain ``int`` holding 64 bits, where bit ``i`` stands for
square ``i`` (``a1 = 0``, ``h1 = 7``, ``a8 = 56``). Python integers are
unbounded, so every operation that can push bits past ``h8`` masks the
result back to 64 bits. All functions are pure.
"""

from __future__ import annotations

from typing import Callable, Iterator

from .errors import EmptyBitboardError

Bitboard = int
Direction = Callable[[int], int]

FULL = (1 << 64) - 1
EMPTY = 0

FILE_A = 0x0101010101010101
FILE_H = 0x8080808080808080
NOT_FILE_A = FULL & ~FILE_A
NOT_FILE_H = FULL & ~FILE_H

RANK_1 = 0xFF
RANK_8 = RANK_1 << 56


def square(file: int, rank: int) -> int:
    return rank * 8 + file


def square_file(sq: int) -> int:
    return sq & 7


def square_rank(sq: int) -> int:
    return sq >> 3


def bit(sq: int) -> Bitboard:
    return 1 << sq


def lsb(bb: Bitboard) -> int:
    """Return the index of the lowest set bit.

    Raises :class:`EmptyBitboardError` when ``bb`` is empty; callers are
    expected to test for occupancy first.
    """

    if not bb:
        raise EmptyBitboardError("lsb() called on an empty bitboard")
    return (bb & -bb).bit_length() - 1


def count(bb: Bitboard) -> int:
    return bb.bit_count()


def squares(bb: Bitboard) -> Iterator[int]:
    """Yield the set squares of ``bb`` from lowest to highest."""

    while bb:
        sq = (bb & -bb).bit_length() - 1
        yield sq
        bb &= bb - 1


def east(bb: Bitboard) -> Bitboard:
    return (bb << 1) & NOT_FILE_A


def west(bb: Bitboard) -> Bitboard:
    return (bb >> 1) & NOT_FILE_H


def north(bb: Bitboard) -> Bitboard:
    return (bb << 8) & FULL


def south(bb: Bitboard) -> Bitboard:
    return bb >> 8


def nw(bb: Bitboard) -> Bitboard:
    return north(west(bb))


def ne(bb: Bitboard) -> Bitboard:
    return north(east(bb))


def sw(bb: Bitboard) -> Bitboard:
    return south(west(bb))


def se(bb: Bitboard) -> Bitboard:
    return south(east(bb))


def flip(bb: Bitboard) -> Bitboard:
    """Mirror ``bb`` top to bottom.

    Each rank occupies exactly one byte, so reversing the byte order of the
    64-bit word reverses the rank order while leaving every file in place:
    ``a1`` maps to ``a8``, ``h2`` to ``h7`` and so on.
    """

    return int.from_bytes((bb & FULL).to_bytes(8, "little"), "big")


def file_mask(sq: int) -> Bitboard:
    """Every square on the file of ``sq``."""

    return FILE_A << square_file(sq)


def to_string(bb: Bitboard) -> str:
    """Render ``bb`` as an 8x8 grid, rank 8 first. Used for debugging."""

    rows = []
    for rank in range(7, -1, -1):
        rows.append(" ".join("1" if bb >> square(file, rank) & 1 else "." for file in range(8)))
    return "\n".join(rows)


__all__ = [
    "Bitboard",
    "Direction",
    "EMPTY",
    "FILE_A",
    "FILE_H",
    "FULL",
    "RANK_1",
    "RANK_8",
    "bit",
    "count",
    "east",
    "file_mask",
    "flip",
    "lsb",
    "ne",
    "north",
    "nw",
    "se",
    "south",
    "square",
    "square_file",
    "square_rank",
    "squares",
    "sw",
    "to_string",
    "west",
]
