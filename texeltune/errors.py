"""Exception hierarchy shared by the texeltune modules."""

from __future__ import annotations


class TexelTuneError(Exception):
    """Base class for every error raised by texeltune."""


class FenError(TexelTuneError, ValueError):
    """A FEN record could not be decoded."""


class AdapterError(TexelTuneError, ValueError):
    """An external board object could not be converted into a position."""


class EmptyBitboardError(TexelTuneError, ValueError):
    """A bit scan was requested on an empty bitboard."""


class InvariantError(TexelTuneError, AssertionError):
    """Internal consistency check failed.

    Raised for overlapping occupancy and for feature-ordering mismatches
    between traces and parameter vectors. A tuning run must stop when this
    is raised; it is never caught inside the package.
    """


__all__ = [
    "AdapterError",
    "EmptyBitboardError",
    "FenError",
    "InvariantError",
    "TexelTuneError",
]
