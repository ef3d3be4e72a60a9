from dataclasses import replace

import pytest

from texeltune import bitboard as bbm
from texeltune.errors import InvariantError
from texeltune.fen import parse_fen
from texeltune.position import START_PIECES, Piece, Position, flip


FENS = [
    "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
    "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w Kq - 0 1",
    "rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 3",
    "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 b - - 0 1",
]


@pytest.mark.parametrize("fen", FENS)
def test_flip_twice_restores_position(fen: str) -> None:
    position = parse_fen(fen)
    assert flip(flip(position)) == position


def test_flip_of_start_position_swaps_sides_only() -> None:
    flipped = flip(Position())
    assert flipped == replace(Position(), mirrored=True)


def test_flip_swaps_castling_pairs_across_sides() -> None:
    position = Position(castling=(True, False, False, True))
    assert flip(position).castling == (False, True, True, False)


def test_flip_mirrors_en_passant_square() -> None:
    e3 = bbm.bit(bbm.square(4, 2))
    e6 = bbm.bit(bbm.square(4, 5))
    position = replace(Position(), en_passant=e3)
    assert flip(position).en_passant == e6


def test_default_position_is_start_position() -> None:
    position = Position()
    assert position.pieces == START_PIECES
    assert position.own(Piece.KING) == bbm.bit(bbm.square(4, 0))
    assert position.theirs(Piece.KING) == bbm.bit(bbm.square(4, 7))
    assert bbm.count(position.occupied) == 32
    position.validate()


def test_piece_at_reports_kind_and_side() -> None:
    position = Position()
    assert position.piece_at(bbm.square(3, 0)) == (Piece.QUEEN, 0)
    assert position.piece_at(bbm.square(6, 7)) == (Piece.KNIGHT, 1)
    assert position.piece_at(bbm.square(4, 4)) is None


def test_validate_rejects_overlapping_sides() -> None:
    position = Position(sides=(1, 1), pieces=(1, 0, 0, 0, 0, 0))
    with pytest.raises(InvariantError):
        position.validate()


def test_validate_rejects_overlapping_piece_kinds() -> None:
    position = Position(sides=(1, 0), pieces=(1, 1, 0, 0, 0, 0))
    with pytest.raises(InvariantError):
        position.validate()


def test_validate_rejects_piece_without_side() -> None:
    position = Position(sides=(0, 0), pieces=(1, 0, 0, 0, 0, 0))
    with pytest.raises(InvariantError):
        position.validate()


def test_validate_rejects_wide_en_passant_mask() -> None:
    position = replace(Position(), en_passant=0b11 << 16)
    with pytest.raises(InvariantError):
        position.validate()


def test_validate_rejects_bits_beyond_the_board() -> None:
    position = Position(sides=((1 << 70) | 1, 0), pieces=((1 << 70) | 1, 0, 0, 0, 0, 0))
    with pytest.raises(InvariantError):
        position.validate()
    with pytest.raises(InvariantError):
        replace(Position(), en_passant=1 << 64).validate()
