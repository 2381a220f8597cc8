from __future__ import annotations

from .interfaces import LinearParams, PointLike


class LinearClassifier:
    def __init__(self, params: LinearParams | None = None) -> None:
        params = params or LinearParams()
        if len(params.weights) != 2:
            raise ValueError(f"LinearClassifier expects 2 weights, got {len(params.weights)}: {params.weights}")
        self.params = LinearParams(weights=(float(params.weights[0]), float(params.weights[1])), bias=float(params.bias))

    def score(self, point: PointLike) -> float:
        w0, w1 = self.params.weights
        return w0 * point.x + w1 * point.y + self.params.bias

    def predict(self, point: PointLike) -> int:
        # A point exactly on the boundary (score == 0) is class 0.
        return 1 if self.score(point) > 0 else 0
