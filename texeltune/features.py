"""Feature families, the ordered feature schema and per-evaluation traces.

Every evaluator declares its tunable features once, through
:meth:`FeatureSchema.declare`. The schema then owns the only traversal over
those features (:meth:`FeatureSchema.slots`), and everything that needs a
flat vector goes through it:

* :meth:`Trace.coefficients` turns per-colour counts into the regression row,
* :meth:`FeatureSchema.initial_parameters` seeds the weight vector,
* :mod:`texeltune.parameters` renders fitted weights back into source form.

Because all three walk the same list, the position of a feature in the
coefficient vector always matches its position in the parameter vector.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NamedTuple, Sequence, Tuple, Union

from .errors import InvariantError


class Pair(NamedTuple):
    mg: int
    eg: int


Weight = Union[int, Pair]
ParameterValue = Union[float, List[float]]

MIDGAME = 0
ENDGAME = 1


def S(mg: int, eg: int) -> Pair:
    """Tapered weight with a midgame and an endgame component."""

    return Pair(mg, eg)


def as_pair(weight: Weight) -> Pair:
    if isinstance(weight, Pair):
        return weight
    return Pair(weight, weight)


class FeatureSlot(NamedTuple):
    family: str
    index: Tuple[int, ...]

    def __str__(self) -> str:
        return self.family + "".join(f"[{i}]" for i in self.index)


@dataclass(frozen=True)
class FeatureFamily:
    """A named block of tunable weights with a fixed shape.

    ``weights`` holds the default weights flattened in row-major order.
    ``row_names`` labels the rows of two dimensional families when they
    are printed (one row per piece kind for piece-square tables).
    """

    name: str
    shape: Tuple[int, ...]
    weights: Tuple[Pair, ...]
    row_names: Tuple[str, ...] = ()

    @property
    def size(self) -> int:
        return math.prod(self.shape)

    @property
    def layout(self) -> str:
        if not self.shape:
            return "single"
        if len(self.shape) == 1:
            return "array"
        if self.row_names:
            return "pst"
        return "table"

    def flat_index(self, index: Union[int, Sequence[int]]) -> int:
        if isinstance(index, int):
            index = (index,) if self.shape else ()
        if len(index) != len(self.shape):
            raise InvariantError(f"{self.name}: index {tuple(index)} does not match shape {self.shape}")
        flat = 0
        for value, extent in zip(index, self.shape):
            if not 0 <= value < extent:
                raise InvariantError(f"{self.name}: index {tuple(index)} out of range for shape {self.shape}")
            flat = flat * extent + value
        return flat

    def unflatten(self, flat: int) -> Tuple[int, ...]:
        index = []
        for extent in reversed(self.shape):
            flat, value = divmod(flat, extent)
            index.append(value)
        return tuple(reversed(index))


def _flatten_weights(weights: object) -> List[Weight]:
    if isinstance(weights, (int, Pair)):
        return [weights]
    flat: List[Weight] = []
    for item in weights:  # type: ignore[attr-defined]
        if isinstance(item, (int, Pair)):
            flat.append(item)
        else:
            flat.extend(_flatten_weights(item))
    return flat


def _infer_shape(weights: object) -> Tuple[int, ...]:
    if isinstance(weights, (int, Pair)):
        return ()
    items = list(weights)  # type: ignore[call-overload]
    return (len(items),) + _infer_shape(items[0])


class FeatureSchema:
    """Ordered collection of feature families for one evaluator variant."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._families: List[FeatureFamily] = []
        self._by_name: Dict[str, FeatureFamily] = {}
        self._offsets: Dict[str, int] = {}
        self._size = 0

    def declare(
        self,
        name: str,
        weights: object,
        *,
        shape: Tuple[int, ...] | None = None,
        row_names: Sequence[str] = (),
    ) -> FeatureFamily:
        """Append a feature family and return it.

        ``weights`` is a single weight, a list of weights or a nested list of
        weights, where a weight is an ``int`` or an ``S(mg, eg)`` pair. When
        ``shape`` is given the flattened weights are reshaped to it, so a
        flat 48 entry table can be declared as ``shape=(6, 8)``.
        """

        if name in self._by_name:
            raise InvariantError(f"feature family {name!r} declared twice in schema {self.name!r}")
        flat = [as_pair(weight) for weight in _flatten_weights(weights)]
        if shape is None:
            shape = _infer_shape(weights)
        family = FeatureFamily(name=name, shape=tuple(shape), weights=tuple(flat), row_names=tuple(row_names))
        if family.size != len(flat):
            raise InvariantError(f"{name}: {len(flat)} weights do not fill shape {family.shape}")
        if row_names and len(row_names) != family.shape[0]:
            raise InvariantError(f"{name}: {len(row_names)} row names for {family.shape[0]} rows")

        self._families.append(family)
        self._by_name[name] = family
        self._offsets[name] = self._size
        self._size += family.size
        return family

    @property
    def families(self) -> Tuple[FeatureFamily, ...]:
        return tuple(self._families)

    @property
    def size(self) -> int:
        return self._size

    def family(self, name: str) -> FeatureFamily:
        try:
            return self._by_name[name]
        except KeyError:
            raise InvariantError(f"schema {self.name!r} has no feature family {name!r}") from None

    def offset(self, name: str) -> int:
        self.family(name)
        return self._offsets[name]

    def slot_index(self, name: str, index: Union[int, Sequence[int]] = ()) -> int:
        family = self.family(name)
        return self._offsets[name] + family.flat_index(index)

    def slots(self) -> Iterator[Tuple[FeatureFamily, int, FeatureSlot]]:
        """Walk every tunable slot in vector order.

        Yields ``(family, position_in_vector, slot_label)``.
        """

        position = 0
        for family in self._families:
            for flat in range(family.size):
                yield family, position, FeatureSlot(family.name, family.unflatten(flat))
                position += 1

    def labels(self) -> List[FeatureSlot]:
        return [label for _, _, label in self.slots()]

    def default_weights(self) -> List[Pair]:
        weights: List[Pair] = []
        for family, position, _ in self.slots():
            weights.append(family.weights[position - self._offsets[family.name]])
        return weights

    def labelled_parameters(self, tapered: bool) -> List[Tuple[FeatureSlot, ParameterValue]]:
        labelled: List[Tuple[FeatureSlot, ParameterValue]] = []
        for family, position, label in self.slots():
            mg, eg = family.weights[position - self._offsets[family.name]]
            value: ParameterValue = [float(mg), float(eg)] if tapered else float(mg)
            labelled.append((label, value))
        return labelled

    def initial_parameters(self, tapered: bool) -> List[ParameterValue]:
        """Seed vector: the declared weights in slot order.

        Tapered parameters are ``[mg, eg]`` lists, scalar ones take the
        midgame component.
        """

        return [value for _, value in self.labelled_parameters(tapered)]

    def new_trace(self) -> "Trace":
        return Trace(self)


@dataclass
class Trace:
    """Per-colour feature counts gathered during one evaluation.

    Colour 0 is White and colour 1 is Black, whatever the side to move.
    """

    schema: FeatureSchema
    counts: Tuple[List[int], List[int]] = field(init=False)

    def __post_init__(self) -> None:
        self.counts = ([0] * self.schema.size, [0] * self.schema.size)

    def add(self, name: str, index: Union[int, Sequence[int]], color: int, amount: int = 1) -> int:
        slot = self.schema.slot_index(name, index)
        self.counts[color][slot] += amount
        return slot

    def get(self, name: str, index: Union[int, Sequence[int]], color: int) -> int:
        return self.counts[color][self.schema.slot_index(name, index)]

    def labelled_coefficients(self) -> List[Tuple[FeatureSlot, int]]:
        white, black = self.counts
        return [(label, white[position] - black[position]) for _, position, label in self.schema.slots()]

    def coefficients(self) -> List[int]:
        """White count minus Black count for every slot, in vector order."""

        return [value for _, value in self.labelled_coefficients()]


__all__ = [
    "ENDGAME",
    "FeatureFamily",
    "FeatureSchema",
    "FeatureSlot",
    "MIDGAME",
    "Pair",
    "ParameterValue",
    "S",
    "Trace",
    "Weight",
    "as_pair",
]
