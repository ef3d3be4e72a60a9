"""Rebalancing and source-literal rendering of parameter vectors.

The rendered text is meant to be pasted into an engine's weight tables, so
it must be deterministic: the same vector always produces the same text.
Families are rendered in schema order, which is also vector order.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Callable, List, Sequence

from .errors import InvariantError
from .features import ENDGAME, MIDGAME, FeatureFamily, FeatureSchema, ParameterValue

Parameters = List[ParameterValue]


def round_value(value: float) -> int:
    """Round half away from zero."""

    rounded = int(math.floor(abs(value) + 0.5))
    return rounded if value >= 0 else -rounded


def check_length(schema: FeatureSchema, parameters: Sequence[ParameterValue]) -> None:
    if len(parameters) != schema.size:
        raise InvariantError(
            f"schema {schema.name!r} expects {schema.size} parameters, got {len(parameters)}"
        )


def rebalance_psts(
    parameters: Parameters,
    *,
    material_offset: int,
    pst_offset: int,
    pst_size: int,
    tapered: bool,
    pawn_exclusion: bool = False,
    piece_count: int = 5,
    quantization: int = 1,
) -> None:
    """Zero-centre each piece's table in place, moving the mean to material.

    Tables for ``piece_count`` pieces (pawn first) are laid out back to
    back from ``pst_offset``. With ``pawn_exclusion`` the pawn table skips
    its first entry and its last two entries, which pawns never occupy or
    only reach through promotion.
    """

    stages = (MIDGAME, ENDGAME) if tapered else (None,)

    def skipped(piece: int, i: int) -> bool:
        return piece == 0 and pawn_exclusion and i in (0, pst_size - 1, pst_size - 2)

    for piece in range(piece_count):
        start = pst_offset + piece * pst_size
        entries = [i for i in range(pst_size) if not skipped(piece, i)]
        for stage in stages:
            if stage is None:
                total = sum(parameters[start + i] for i in entries)  # type: ignore[misc]
            else:
                total = sum(parameters[start + i][stage] for i in entries)  # type: ignore[index]
            average = total / len(entries)

            if stage is None:
                parameters[material_offset + piece] += average * quantization  # type: ignore[operator]
            else:
                parameters[material_offset + piece][stage] += average * quantization  # type: ignore[index]

            for i in entries:
                if stage is None:
                    parameters[start + i] -= average  # type: ignore[operator]
                else:
                    parameters[start + i][stage] -= average  # type: ignore[index]


def _render_family(family: FeatureFamily, texts: List[str], designated: bool) -> str:
    name = family.name
    layout = family.layout

    if layout == "single":
        if designated:
            return f".{name} = {texts[0]},\n"
        return f"const i32 {name} = {texts[0]};\n"

    if layout == "array":
        body = ", ".join(texts)
        if designated:
            return f".{name} = {{{body}}},\n"
        return f"static const i32 {name}[] = {{{body}}};\n"

    rows, cols = family.shape[0], family.size // family.shape[0]

    if layout == "pst":
        parts = [f".{name} = {{" if designated else f"static const i32 {name}[] = {{"]
        for i, text in enumerate(texts):
            parts.append(f"{text}, ")
            row, col = divmod(i, cols)
            if col == cols - 1:
                parts.append(f"// {family.row_names[row]}\n")
            elif col % 8 == 7:
                parts.append("\n")
        parts.append("},\n" if designated else "};\n")
        return "".join(parts)

    parts = [f".{name} = {{\n" if designated else f"const i32 {name}[][{cols}] = {{\n"]
    for row in range(rows):
        parts.append("    {" + ", ".join(texts[row * cols:(row + 1) * cols]) + "},\n")
    parts.append("},\n" if designated else "};\n")
    return "".join(parts)


def _render(
    schema: FeatureSchema,
    parameters: Sequence[ParameterValue],
    to_text: Callable[[ParameterValue], str],
    designated: bool,
) -> str:
    check_length(schema, parameters)
    parts = []
    position = 0
    for family in schema.families:
        texts = [to_text(value) for value in parameters[position:position + family.size]]
        parts.append(_render_family(family, texts, designated))
        position += family.size
    return "".join(parts)


def render_tapered(schema: FeatureSchema, parameters: Sequence[ParameterValue]) -> str:
    """Render ``[mg, eg]`` parameters as a midgame and an endgame section."""

    sections = []
    for stage, title in ((MIDGAME, "MIDGAME:"), (ENDGAME, "ENDGAME:")):
        body = _render(schema, parameters, lambda value: str(round_value(value[stage])), True)  # type: ignore[index]
        sections.append(f"{title}\n{body}")
    return "".join(sections) + "\n"


def render_scalar(schema: FeatureSchema, parameters: Sequence[ParameterValue]) -> str:
    """Render scalar parameters as constant array declarations."""

    return _render(schema, parameters, lambda value: str(round_value(value)), False) + "\n"  # type: ignore[arg-type]


def pair_text(value: ParameterValue) -> str:
    mg = round_value(value[MIDGAME])  # type: ignore[index]
    eg = round_value(value[ENDGAME])  # type: ignore[index]
    return f"S({mg}, {eg})"


def render_pairs(schema: FeatureSchema, parameters: Sequence[ParameterValue]) -> str:
    """Render ``[mg, eg]`` parameters as ``S(mg, eg)`` declarations."""

    return _render(schema, parameters, pair_text, False) + "\n"


def copy_parameters(parameters: Sequence[ParameterValue]) -> Parameters:
    """Return a mutable copy: ``[mg, eg]`` lists for pairs, floats for scalars."""

    copied: Parameters = []
    for value in parameters:
        if isinstance(value, Real):
            copied.append(float(value))
        else:
            mg, eg = value
            copied.append([float(mg), float(eg)])
    return copied


__all__ = [
    "Parameters",
    "check_length",
    "copy_parameters",
    "pair_text",
    "rebalance_psts",
    "render_pairs",
    "render_scalar",
    "render_tapered",
    "round_value",
]
