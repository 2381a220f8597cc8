from __future__ import annotations

from .interfaces import PointLike, ThresholdParams


class ThresholdClassifier:
    """Decision stump on the x coordinate: left of ``split_x`` is class 0."""

    def __init__(self, params: ThresholdParams | None = None) -> None:
        self.params = params or ThresholdParams()

    @property
    def split_x(self) -> float:
        return self.params.split_x

    def predict(self, point: PointLike) -> int:
        return 0 if point.x < self.params.split_x else 1
