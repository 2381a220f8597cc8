from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class LabeledPoint:
    x: float
    y: float
    label: int

    def as_point(self) -> Point:
        return Point(x=self.x, y=self.y)


def _rows(label: int, coords: list[tuple[float, float]]) -> list[LabeledPoint]:
    return [LabeledPoint(x=float(x), y=float(y), label=label) for x, y in coords]


# Order matters: KNN breaks distance ties by position in this tuple.
TOY_DATASET: tuple[LabeledPoint, ...] = tuple(
    _rows(0, [(1, 2), (2, 3), (3, 1), (4, 4), (5, 2), (1.5, 4), (2.5, 1.5), (3.5, 3.5), (4.5, 1), (5.5, 3)])
    + _rows(1, [(2, 1), (3, 4), (4, 2), (5, 5), (1, 3), (2.5, 4.5), (3.5, 2), (4.5, 4), (5.5, 1.5), (1.5, 1.5)])
)


def dataset_arrays(points: Sequence[LabeledPoint] = TOY_DATASET) -> tuple[np.ndarray, np.ndarray]:
    features = np.asarray([[p.x, p.y] for p in points], dtype=np.float64).reshape(-1, 2)
    labels = np.asarray([p.label for p in points], dtype=np.int32)
    return features, labels


def label_counts(points: Sequence[LabeledPoint] = TOY_DATASET) -> dict[int, int]:
    counts = {0: 0, 1: 0}
    for p in points:
        counts[p.label] = counts.get(p.label, 0) + 1
    return counts
