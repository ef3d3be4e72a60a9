import pytest

from texeltune import bitboard as bbm
from texeltune.errors import EmptyBitboardError


def test_lsb_returns_lowest_set_square() -> None:
    assert bbm.lsb(0b1000) == 3
    assert bbm.lsb(0b1010_0000) == 5
    assert bbm.lsb(1 << 63) == 63


def test_lsb_rejects_empty_board() -> None:
    with pytest.raises(EmptyBitboardError):
        bbm.lsb(0)


def test_count_and_squares() -> None:
    assert bbm.count(bbm.FULL) == 64
    assert bbm.count(0) == 0
    assert list(bbm.squares(0b1010_0001)) == [0, 5, 7]
    assert list(bbm.squares(0)) == []


def test_east_west_do_not_wrap_across_files() -> None:
    h1 = bbm.bit(7)
    a2 = bbm.bit(8)
    assert bbm.east(h1) == 0
    assert bbm.east(bbm.bit(0)) == bbm.bit(1)
    assert bbm.west(a2) == 0
    assert bbm.west(bbm.bit(9)) == a2


def test_north_south_drop_off_board_bits() -> None:
    assert bbm.north(bbm.bit(63)) == 0
    assert bbm.north(bbm.bit(0)) == bbm.bit(8)
    assert bbm.south(bbm.bit(0)) == 0
    assert bbm.south(bbm.bit(63)) == bbm.bit(55)


def test_diagonal_steps() -> None:
    a1 = bbm.bit(bbm.square(0, 0))
    h8 = bbm.bit(bbm.square(7, 7))
    assert bbm.ne(a1) == bbm.bit(bbm.square(1, 1))
    assert bbm.nw(a1) == 0
    assert bbm.sw(h8) == bbm.bit(bbm.square(6, 6))
    assert bbm.se(h8) == 0


def test_flip_reverses_ranks_and_keeps_files() -> None:
    assert bbm.flip(bbm.bit(bbm.square(0, 0))) == bbm.bit(bbm.square(0, 7))
    assert bbm.flip(bbm.bit(bbm.square(7, 1))) == bbm.bit(bbm.square(7, 6))
    assert bbm.flip(bbm.RANK_1) == bbm.RANK_8
    assert bbm.flip(bbm.FILE_A) == bbm.FILE_A
    assert bbm.flip(bbm.FILE_H) == bbm.FILE_H


def test_flip_is_an_involution() -> None:
    for bb in (0, bbm.FULL, 0x00FF00000000FF00, 0x0123456789ABCDEF, 1 << 37):
        assert bbm.flip(bbm.flip(bb)) == bb


def test_square_helpers() -> None:
    e4 = bbm.square(4, 3)
    assert e4 == 28
    assert bbm.square_file(e4) == 4
    assert bbm.square_rank(e4) == 3
    assert bbm.file_mask(e4) == bbm.FILE_A << 4


def test_to_string_puts_rank_eight_first() -> None:
    rows = bbm.to_string(bbm.bit(bbm.square(0, 7))).splitlines()
    assert rows[0].startswith("1")
    assert rows[-1] == ". . . . . . . ."
