"""Conversion of python-chess boards into :class:`Position` objects.

This is the only place that touches the rules library. It reads bitboards
and flags from the board and never mutates it.
"""

from __future__ import annotations

from typing import Optional, Protocol

import chess

from .errors import AdapterError
from .position import Piece, Position, flip

# python-chess piece types are 1-based and ordered like ``Piece``.
_CHESS_PIECE_TYPES = {piece: piece + 1 for piece in Piece}

# Some move generators report a missing en passant square as index 64.
NO_SQUARE = 64


class ExternalBoard(Protocol):
    """The subset of :class:`chess.Board` the adapter relies on."""

    turn: chess.Color
    ep_square: Optional[chess.Square]

    def pieces_mask(self, piece_type: chess.PieceType, color: chess.Color) -> chess.Bitboard:
        ...

    def has_kingside_castling_rights(self, color: chess.Color) -> bool:
        ...

    def has_queenside_castling_rights(self, color: chess.Color) -> bool:
        ...


def _en_passant_mask(ep_square: Optional[int]) -> int:
    if ep_square is None or ep_square == NO_SQUARE:
        return 0
    if not 0 <= ep_square < 64:
        raise AdapterError(f"en passant square index {ep_square} is out of range")
    return 1 << ep_square


def adapt_board(board: ExternalBoard) -> Position:
    """Build a side-to-move relative :class:`Position` from ``board``."""

    white = 0
    black = 0
    pieces = []
    for piece in Piece:
        piece_type = _CHESS_PIECE_TYPES[piece]
        white_bb = board.pieces_mask(piece_type, chess.WHITE)
        black_bb = board.pieces_mask(piece_type, chess.BLACK)
        white |= white_bb
        black |= black_bb
        pieces.append(white_bb | black_bb)

    position = Position(
        sides=(white, black),
        pieces=tuple(pieces),
        castling=(
            bool(board.has_kingside_castling_rights(chess.WHITE)),
            bool(board.has_queenside_castling_rights(chess.WHITE)),
            bool(board.has_kingside_castling_rights(chess.BLACK)),
            bool(board.has_queenside_castling_rights(chess.BLACK)),
        ),
        en_passant=_en_passant_mask(board.ep_square),
        mirrored=False,
    )

    if board.turn == chess.BLACK:
        position = flip(position)
    return position


__all__ = ["ExternalBoard", "NO_SQUARE", "adapt_board"]
