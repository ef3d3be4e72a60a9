"""Evaluator configuration."""

from __future__ import annotations

from dataclasses import dataclass, replace

# Variant used when the caller does not name one.
DEFAULT_EVALUATOR = "split_pst"

# Sum of phase weights with all minor and major pieces on the board.
FULL_PHASE = 24


@dataclass(slots=True, frozen=True)
class EvalConfig:
    """Switches shared by every evaluator variant.

    ``tapered``
        Blend midgame and endgame weights by game phase. When off, every
        parameter is a single scalar and only midgame weights are used.
    ``endgame_scaling``
        Dampen the endgame term by the pawn count of the stronger side. Off
        by default, which pins the scale to 1.
    ``rebalance``
        Zero-centre piece-square tables before printing parameters, folding
        the averages into material. Variants without split tables turn
        this off when they are built, so their parameters print as given.
    ``pawn_rank_exclusion``
        Leave the first rank and the two last ranks out of the pawn rank
        table average while rebalancing.
    ``max_phase``
        Phase value of a full board.
    """

    tapered: bool = True
    endgame_scaling: bool = False
    rebalance: bool = True
    pawn_rank_exclusion: bool = True
    max_phase: int = FULL_PHASE

    def clamp(self) -> "EvalConfig":
        return replace(self, max_phase=max(1, int(self.max_phase)))


__all__ = ["DEFAULT_EVALUATOR", "EvalConfig", "FULL_PHASE"]
