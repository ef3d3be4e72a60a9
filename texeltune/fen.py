"""FEN decoding into :class:`~texeltune.position.Position`."""

from __future__ import annotations

from typing import List

from . import bitboard as bbm
from .errors import FenError
from .position import Piece, Position, flip

PIECE_LETTERS = {
    "p": Piece.PAWN,
    "n": Piece.KNIGHT,
    "b": Piece.BISHOP,
    "r": Piece.ROOK,
    "q": Piece.QUEEN,
    "k": Piece.KING,
}

CASTLING_SLOTS = {"K": 0, "Q": 1, "k": 2, "q": 3}


def _parse_placement(field: str) -> tuple[list[int], list[int]]:
    sides = [0, 0]
    pieces = [0] * 6
    ranks = field.split("/")
    if len(ranks) != 8:
        raise FenError(f"piece placement must have 8 ranks, got {len(ranks)}: {field!r}")

    for row, text in enumerate(ranks):
        rank = 7 - row
        file = 0
        for char in text:
            if char in "12345678":
                file += int(char)
            elif char.lower() in PIECE_LETTERS:
                if file < 8:
                    sq = bbm.square(file, rank)
                    side = 1 if char.islower() else 0
                    sides[side] |= 1 << sq
                    pieces[PIECE_LETTERS[char.lower()]] |= 1 << sq
                file += 1
            else:
                raise FenError(f"unrecognised piece letter {char!r} in {field!r}")
        if file != 8:
            raise FenError(f"rank {rank + 1} describes {file} squares instead of 8: {text!r}")
    return sides, pieces


def _parse_en_passant(field: str) -> int:
    if field == "-":
        return 0
    if len(field) != 2 or field[0] not in "abcdefgh" or field[1] not in "12345678":
        raise FenError(f"invalid en passant square {field!r}")
    return 1 << bbm.square(ord(field[0]) - ord("a"), int(field[1]) - 1)


def parse_fen(fen: str) -> Position:
    """Decode ``fen`` into a position seen from the side to move.

    The halfmove clock and fullmove number are optional and ignored. When
    Black is to move the decoded position is flipped once, so
    ``sides[0]`` always holds the pieces of the side to move.
    """

    fields: List[str] = fen.split()
    if not 4 <= len(fields) <= 6:
        raise FenError(f"expected 4 to 6 whitespace separated fields, got {len(fields)}: {fen!r}")
    placement, active, castling_field, ep_field = fields[:4]

    sides, pieces = _parse_placement(placement)

    if active not in ("w", "b"):
        raise FenError(f"active colour must be 'w' or 'b', got {active!r}")

    castling = [False, False, False, False]
    if castling_field != "-":
        for char in castling_field:
            if char not in CASTLING_SLOTS:
                raise FenError(f"invalid castling availability {castling_field!r}")
            castling[CASTLING_SLOTS[char]] = True

    position = Position(
        sides=(sides[0], sides[1]),
        pieces=tuple(pieces),
        castling=(castling[0], castling[1], castling[2], castling[3]),
        en_passant=_parse_en_passant(ep_field),
        mirrored=False,
    )

    if active == "b":
        position = flip(position)
    return position


__all__ = ["CASTLING_SLOTS", "PIECE_LETTERS", "parse_fen"]
