from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class PointLike(Protocol):
    x: float
    y: float


class Classifier(Protocol):
    def predict(self, point: PointLike) -> int: ...


@dataclass(frozen=True)
class ThresholdParams:
    split_x: float = 3.5


@dataclass(frozen=True)
class LinearParams:
    weights: tuple[float, float] = (0.5, -0.3)
    bias: float = -1.5


@dataclass(frozen=True)
class KNNParams:
    k: int = 3
