"""Evaluator variants and the registry used to pick one by name."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional, Tuple, Type

from ..config import DEFAULT_EVALUATOR, EvalConfig
from ..evaluation import Evaluator
from ..utils import Logger, make_logger, null_logger
from .material import MaterialEvaluator
from .split_pst import SplitPstEvaluator
from .square_pst import SquarePstEvaluator


class EvaluatorRegistry:
    PRESETS: Dict[str, Tuple[Type[Evaluator], EvalConfig]] = {
        "material": (MaterialEvaluator, EvalConfig(tapered=False, rebalance=False)),
        "material_tapered": (MaterialEvaluator, EvalConfig(rebalance=False)),
        "split_pst": (SplitPstEvaluator, EvalConfig()),
        "square_pst": (SquarePstEvaluator, EvalConfig(rebalance=False)),
    }

    @classmethod
    def names(cls) -> Tuple[str, ...]:
        return tuple(cls.PRESETS)

    @classmethod
    def resolve(
        cls,
        name: str = DEFAULT_EVALUATOR,
        config: Optional[EvalConfig] = None,
        *,
        logger: Optional[Logger] = None,
        **overrides: object,
    ) -> Evaluator:
        """Build a fresh evaluator for the preset ``name``.

        ``config`` replaces the preset's configuration; keyword overrides are
        applied on top of whichever configuration is used.
        """

        if name not in cls.PRESETS:
            raise ValueError(f"Unknown evaluator '{name}' (expected one of {', '.join(cls.PRESETS)})")
        evaluator_type, preset = cls.PRESETS[name]
        resolved = config or preset
        if overrides:
            resolved = replace(resolved, **overrides)
        log = logger or null_logger
        log(f"evaluator resolved: {name} (tapered={resolved.tapered})")
        return evaluator_type(resolved, logger=logger)


def create_evaluator(
    name: str = DEFAULT_EVALUATOR,
    config: Optional[EvalConfig] = None,
    *,
    logger: Optional[Logger] = None,
    dev: bool = False,
    **overrides: object,
) -> Evaluator:
    """Resolve ``name``; with ``dev`` and no ``logger``, print debug lines."""

    if logger is None:
        logger = make_logger(dev)
    return EvaluatorRegistry.resolve(name, config, logger=logger, **overrides)


__all__ = [
    "EvaluatorRegistry",
    "MaterialEvaluator",
    "SplitPstEvaluator",
    "SquarePstEvaluator",
    "create_evaluator",
]
